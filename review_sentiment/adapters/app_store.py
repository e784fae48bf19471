"""Apple App Store record adapter."""

from typing import Any

from review_sentiment.adapters._fields import as_int, as_text, ensure_mapping, record_id
from review_sentiment.models.review import Review


def normalize_app_store(record: Any, index: int) -> Review:
    """
    Map an app-store-scraper review record to a Review.

    Raw shape: ``{id, userName, date, score, title, text, version}``.
    The App Store has no thumbs-up count, so it is always 0.
    """
    record = ensure_mapping(record, index)

    return Review(
        id=record_id(record, index),
        user_name=as_text(record.get("userName")),
        date=as_text(record.get("date")),
        rating=as_int(record.get("score")),
        review_text=as_text(record.get("text")),
        extras={
            "title": as_text(record.get("title")),
            "version": as_text(record.get("version")),
            "thumbsUp": 0,
        },
    )
