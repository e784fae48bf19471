"""Twitter/X post adapter."""

from datetime import datetime, timezone
from typing import Any

from review_sentiment.adapters._fields import as_int, as_text, ensure_mapping, record_id
from review_sentiment.models.review import Review


def _created_at(record) -> str:
    created = record.get("timeParsed") or record.get("createdAt")
    if created:
        return as_text(created)
    # Posts without a timestamp are stamped with the time they were normalized
    return datetime.now(timezone.utc).isoformat()


def normalize_twitter(record: Any, index: int) -> Review:
    """
    Map a scraped tweet to a Review.

    Tweets carry no star rating, so ``rating`` is 0 and the post stays out of
    the 1-5 histogram.
    """
    record = ensure_mapping(record, index)

    photos = record.get("photos") or []
    username = as_text(record.get("username"))

    return Review(
        id=record_id(record, index, prefix="tweet"),
        user_name=username,
        date=_created_at(record),
        rating=0,
        review_text=as_text(record.get("text")),
        extras={
            "author": username or "Unknown",
            "username": username or "unknown",
            "profileImage": as_text(photos[0]) if isinstance(photos, list) and photos else "",
            "verified": bool(record.get("verified", False)),
            "likes": as_int(record.get("likes")),
            "retweets": as_int(record.get("retweets")),
            "replies": as_int(record.get("replies")),
            "url": as_text(record.get("permanentUrl") or record.get("url")),
        },
    )
