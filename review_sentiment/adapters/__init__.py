"""Adapters that map raw source records to canonical reviews."""

from review_sentiment.adapters.app_store import normalize_app_store
from review_sentiment.adapters.play_store import normalize_play_store
from review_sentiment.adapters.registry import (
    ADAPTERS,
    get_adapter,
    list_sources,
    normalize_batch,
    normalize_record,
)
from review_sentiment.adapters.twitter import normalize_twitter

__all__ = [
    "ADAPTERS",
    "get_adapter",
    "list_sources",
    "normalize_app_store",
    "normalize_batch",
    "normalize_play_store",
    "normalize_record",
    "normalize_twitter",
]
