"""Data models for the review sentiment pipeline."""

from review_sentiment.models.review import NormalizedBatch, Review
from review_sentiment.models.sentiment import (
    BatchStats,
    RatingStats,
    SentimentDistribution,
    SentimentLabel,
    SentimentResult,
    TextStats,
)
from review_sentiment.models.source import AppInfo, SourceKind

__all__ = [
    "AppInfo",
    "BatchStats",
    "NormalizedBatch",
    "RatingStats",
    "Review",
    "SentimentDistribution",
    "SentimentLabel",
    "SentimentResult",
    "SourceKind",
    "TextStats",
]
