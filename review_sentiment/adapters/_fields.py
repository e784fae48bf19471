"""Field coercion helpers shared by the source adapters."""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from review_sentiment.exceptions import MalformedRecordError


def ensure_mapping(record: Any, index: int) -> Mapping[str, Any]:
    """Reject records that are not mappings."""
    if not isinstance(record, Mapping):
        raise MalformedRecordError(index, f"expected an object, got {type(record).__name__}")
    return record


def as_text(value: Any, default: str = "") -> str:
    """Convert to string, using ``default`` for None/empty values."""
    if value is None or value == "":
        return default
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def as_int(value: Any, default: int = 0) -> int:
    """
    Convert to int without range checks.

    Floats are truncated, numeric strings parsed, anything else falls back to
    ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        if isinstance(value, float):
            return int(value)
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return default


def record_id(record: Mapping[str, Any], index: int, prefix: str = "review") -> str:
    """Return the source id, or ``<prefix>-<index>`` when it is missing."""
    return as_text(record.get("id"), default=f"{prefix}-{index}")
