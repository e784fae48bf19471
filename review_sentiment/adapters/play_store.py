"""Google Play Store record adapter."""

from typing import Any

from review_sentiment.adapters._fields import as_int, as_text, ensure_mapping, record_id
from review_sentiment.models.review import Review


def normalize_play_store(record: Any, index: int) -> Review:
    """
    Map a google-play-scraper review record to a Review.

    Raw shape: ``{id, userName, userImage, date, score, text, replyDate,
    replyText, thumbsUp, version}``. Every key is optional.
    """
    record = ensure_mapping(record, index)

    return Review(
        id=record_id(record, index),
        user_name=as_text(record.get("userName")),
        date=as_text(record.get("date")),
        rating=as_int(record.get("score")),
        review_text=as_text(record.get("text")),
        extras={
            "userImage": as_text(record.get("userImage")),
            "replyDate": as_text(record.get("replyDate")),
            "replyText": as_text(record.get("replyText")),
            "thumbsUp": as_int(record.get("thumbsUp")),
            "version": as_text(record.get("version")),
        },
    )
