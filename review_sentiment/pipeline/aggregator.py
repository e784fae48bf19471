"""Batch-level sentiment scoring and statistics."""

from collections.abc import Mapping, Sequence
from typing import Any

from review_sentiment.exceptions import InvalidInputError
from review_sentiment.models.review import Review
from review_sentiment.models.sentiment import (
    BatchStats,
    RatingStats,
    SentimentDistribution,
    SentimentLabel,
    SentimentResult,
)
from review_sentiment.pipeline.rounding import format_fixed, round_half_up
from review_sentiment.pipeline.sentiment import SentimentAnalyzer, default_analyzer

DEFAULT_TEXT_FIELD = "reviewText"


def _percentage(count: int, total: int) -> str:
    return format_fixed(count / total * 100, 2)


def get_stats(results: Sequence[SentimentResult]) -> BatchStats:
    """
    Compute label counts, percentages and averages for a batch.

    Percentages are strings with two decimals. An empty batch gives the
    zero-valued stats with ``"0.00"`` percentages.
    """
    if not results:
        return BatchStats()

    total = len(results)
    counts = {label: 0 for label in SentimentLabel}
    for result in results:
        counts[result.label] += 1

    total_score = sum(r.score for r in results)
    total_confidence = sum(r.confidence for r in results)

    return BatchStats(
        total=total,
        positive=counts[SentimentLabel.POSITIVE],
        negative=counts[SentimentLabel.NEGATIVE],
        neutral=counts[SentimentLabel.NEUTRAL],
        distribution=SentimentDistribution(
            positive=_percentage(counts[SentimentLabel.POSITIVE], total),
            negative=_percentage(counts[SentimentLabel.NEGATIVE], total),
            neutral=_percentage(counts[SentimentLabel.NEUTRAL], total),
        ),
        avg_score=round_half_up(total_score / total, 2),
        avg_confidence=round_half_up(total_confidence / total, 2),
    )


def _review_text(review: Any, text_field: str) -> str:
    if isinstance(review, Review):
        value = review.get_field(text_field)
    elif isinstance(review, Mapping):
        value = review.get(text_field)
    else:
        value = None
    return value if isinstance(value, str) else ""


def analyze_reviews(
    reviews: Any,
    text_field: str = DEFAULT_TEXT_FIELD,
    analyzer: SentimentAnalyzer | None = None,
) -> list[Any]:
    """
    Attach a sentiment result to every review.

    Reviews can be ``Review`` models or plain mappings. Each one is copied
    with a ``sentiment`` entry added; nothing else changes and the input is
    not mutated. A missing text field is scored as empty text.

    Args:
        reviews: Sequence of reviews
        text_field: Field holding the text to score
        analyzer: Analyzer to use (shared default if omitted)

    Returns:
        New list of reviews with sentiment attached, in input order

    Raises:
        InvalidInputError: If ``reviews`` is not a sequence
    """
    if not isinstance(reviews, Sequence) or isinstance(reviews, (str, bytes)):
        raise InvalidInputError('Please provide "reviews" array')

    analyzer = analyzer or default_analyzer()
    results = analyzer.analyze_batch([_review_text(r, text_field) for r in reviews])

    analyzed = []
    for review, result in zip(reviews, results):
        if isinstance(review, Review):
            analyzed.append(review.with_sentiment(result))
        elif isinstance(review, Mapping):
            analyzed.append({**review, "sentiment": result})
        else:
            analyzed.append({"value": review, "sentiment": result})
    return analyzed


def sentiments_of(reviews: Sequence[Any]) -> list[SentimentResult]:
    """Collect the sentiment results attached by ``analyze_reviews``."""
    results = []
    for review in reviews:
        result = review.sentiment if isinstance(review, Review) else review.get("sentiment")
        if result is not None:
            results.append(result)
    return results


def get_rating_stats(reviews: Sequence[Review]) -> RatingStats:
    """
    Average star rating and a 1-5 histogram.

    Out-of-range ratings count toward the average but not the histogram.
    """
    if not reviews:
        return RatingStats()

    stats = RatingStats()
    total = 0
    for review in reviews:
        total += review.rating
        key = str(review.rating)
        if key in stats.rating_distribution:
            stats.rating_distribution[key] += 1

    stats.avg_rating = round_half_up(total / len(reviews), 2)
    return stats
