"""Shared infrastructure components."""

from review_sentiment.core.retry_handler import RetryHandler

__all__ = [
    "RetryHandler",
]
