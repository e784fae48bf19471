"""CSV export of canonical reviews."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable

from review_sentiment.models.review import Review
from review_sentiment.models.source import AppInfo, SourceKind


@dataclass(frozen=True)
class CsvColumn:
    """A CSV column: header and how to read its value."""
    header: str
    value: Callable[[Review, AppInfo], Any]
    numeric: bool = False


def _extra(name: str, default: Any = "") -> Callable[[Review, AppInfo], Any]:
    return lambda review, app: review.extras.get(name, default)


_APP_NAME = CsvColumn("App Name", lambda r, app: app.title)
_APP_ID = CsvColumn("App ID", lambda r, app: app.app_id)
_USER_NAME = CsvColumn("User Name", lambda r, app: r.user_name)
_DATE = CsvColumn("Date", lambda r, app: r.date)
_RATING = CsvColumn("Rating", lambda r, app: r.rating, numeric=True)
_REVIEW_TEXT = CsvColumn("Review Text", lambda r, app: r.review_text)

PLAY_STORE_COLUMNS: tuple[CsvColumn, ...] = (
    _APP_NAME,
    _APP_ID,
    _USER_NAME,
    _DATE,
    _RATING,
    _REVIEW_TEXT,
    CsvColumn("Thumbs Up", _extra("thumbsUp", 0), numeric=True),
    CsvColumn("Version", _extra("version")),
    CsvColumn("Reply Date", _extra("replyDate")),
    CsvColumn("Reply Text", _extra("replyText")),
)

APP_STORE_COLUMNS: tuple[CsvColumn, ...] = (
    _APP_NAME,
    _APP_ID,
    _USER_NAME,
    _DATE,
    _RATING,
    CsvColumn("Review Title", _extra("title")),
    _REVIEW_TEXT,
    CsvColumn("Version", _extra("version")),
)

TWITTER_COLUMNS: tuple[CsvColumn, ...] = (
    CsvColumn("Query", lambda r, app: app.title),
    CsvColumn("Tweet ID", lambda r, app: r.id),
    CsvColumn("Author", _extra("author")),
    CsvColumn("Username", _extra("username")),
    CsvColumn("Verified", lambda r, app: "Yes" if r.extras.get("verified") else "No", numeric=True),
    CsvColumn("Created At", lambda r, app: r.date),
    CsvColumn("Text", lambda r, app: r.review_text),
    CsvColumn("Likes", _extra("likes", 0), numeric=True),
    CsvColumn("Retweets", _extra("retweets", 0), numeric=True),
    CsvColumn("Replies", _extra("replies", 0), numeric=True),
    CsvColumn("URL", _extra("url")),
)

COLUMNS_BY_SOURCE: dict[SourceKind, tuple[CsvColumn, ...]] = {
    SourceKind.PLAY_STORE: PLAY_STORE_COLUMNS,
    SourceKind.APP_STORE: APP_STORE_COLUMNS,
    SourceKind.TWITTER: TWITTER_COLUMNS,
}


def columns_for(kind: SourceKind | str) -> tuple[CsvColumn, ...]:
    """Get the fixed column layout for a source."""
    return COLUMNS_BY_SOURCE[SourceKind.parse(kind)]


def escape_csv_field(value: Any) -> str:
    """
    Escape a single CSV field.

    The value is quoted, with inner quotes doubled, only if it contains a
    comma, a newline or a double quote. None becomes an empty string.
    """
    if value is None:
        return ""
    text = str(value)
    if "," in text or "\n" in text or '"' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def _numeric(value: Any) -> str:
    if value is None or value == "":
        return "0"
    return str(value)


def to_csv(
    reviews: Sequence[Review],
    app_info: AppInfo,
    columns: Sequence[CsvColumn],
) -> str:
    """
    Serialize reviews to CSV text.

    Rows follow input order. Numeric columns are written bare, every other
    value goes through ``escape_csv_field``. Each row ends with a newline.

    Args:
        reviews: Canonical reviews
        app_info: App metadata for the App Name / App ID columns
        columns: Column layout, usually from ``columns_for``

    Returns:
        CSV text including the header row
    """
    lines = [",".join(column.header for column in columns)]

    for review in reviews:
        row = []
        for column in columns:
            value = column.value(review, app_info)
            row.append(_numeric(value) if column.numeric else escape_csv_field(value))
        lines.append(",".join(row))

    return "\n".join(lines) + "\n"


def split_csv_line(line: str) -> list[str]:
    """
    Split one CSV record into fields, undoing ``escape_csv_field``.

    ``line`` is a full record and may contain newlines inside quoted fields.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if in_quotes:
            if char == '"':
                if i + 1 < len(line) and line[i + 1] == '"':
                    current.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                current.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ",":
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current))
    return fields
