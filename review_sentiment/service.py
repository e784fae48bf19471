"""
Request-level operations.

Each function takes one request's input and returns a JSON-serializable
dict in the shape HTTP handlers or the CLI hand back to callers.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from review_sentiment.adapters import normalize_batch
from review_sentiment.exceptions import InvalidInputError
from review_sentiment.models.review import Review
from review_sentiment.models.sentiment import SentimentResult
from review_sentiment.models.source import AppInfo, SourceKind
from review_sentiment.pipeline.aggregator import (
    DEFAULT_TEXT_FIELD,
    analyze_reviews,
    get_rating_stats,
    get_stats,
    sentiments_of,
)
from review_sentiment.pipeline.sentiment import SentimentAnalyzer, default_analyzer
from review_sentiment.pipeline.text_processor import (
    PreprocessOptions,
    get_stats as get_text_stats,
    preprocess as preprocess_text,
)
from review_sentiment.storage.csv_export import columns_for, to_csv
from review_sentiment.storage.export_sink import ExportSinkCoordinator

PREVIEW_SIZE = 10


def _review_json(review: Any) -> Any:
    if isinstance(review, Review):
        return review.to_dict()
    if isinstance(review, Mapping):
        return {
            key: value.to_dict() if isinstance(value, SentimentResult) else value
            for key, value in review.items()
        }
    return review


def analyze_text(text: str, analyzer: SentimentAnalyzer | None = None) -> dict[str, Any]:
    """Score a single text."""
    analyzer = analyzer or default_analyzer()
    return {"ok": True, "result": analyzer.analyze(text).to_dict()}


def analyze_texts(
    texts: Any,
    analyzer: SentimentAnalyzer | None = None,
    preview_size: int = PREVIEW_SIZE,
) -> dict[str, Any]:
    """
    Score a batch of texts.

    Raises:
        InvalidInputError: If ``texts`` is not a list
    """
    analyzer = analyzer or default_analyzer()
    results = analyzer.analyze_batch(texts)
    serialized = [r.to_dict() for r in results]

    return {
        "ok": True,
        "results": serialized,
        "stats": get_stats(results).to_dict(),
        "preview": serialized[:preview_size],
    }


def analyze_text_or_texts(payload: Mapping[str, Any], analyzer: SentimentAnalyzer | None = None) -> dict[str, Any]:
    """
    Dispatch on a ``{"text": ...}`` or ``{"texts": [...]}`` payload.

    Raises:
        InvalidInputError: If neither a non-empty ``text`` nor a ``texts`` list is given
    """
    if not isinstance(payload, Mapping):
        raise InvalidInputError('Please provide "text" (string) or "texts" (array)')

    text = payload.get("text")
    texts = payload.get("texts")

    if text and not isinstance(text, str):
        raise InvalidInputError('"text" must be a string')
    if text:
        return analyze_text(text, analyzer)
    if isinstance(texts, list):
        return analyze_texts(texts, analyzer)
    raise InvalidInputError('Please provide "text" (string) or "texts" (array)')


def analyze_review_batch(
    reviews: Any,
    text_field: str = DEFAULT_TEXT_FIELD,
    analyzer: SentimentAnalyzer | None = None,
    preview_size: int = PREVIEW_SIZE,
) -> dict[str, Any]:
    """
    Attach sentiment to already-shaped reviews and summarize the batch.

    Raises:
        InvalidInputError: If ``reviews`` is not a list
    """
    analyzed = analyze_reviews(reviews, text_field, analyzer)
    serialized = [_review_json(r) for r in analyzed]

    return {
        "ok": True,
        "count": len(analyzed),
        "reviews": serialized,
        "preview": serialized[:preview_size],
        "stats": get_stats(sentiments_of(analyzed)).to_dict(),
    }


def predict(
    text: str,
    preprocess: bool = True,
    locale: str = "id",
    analyzer: SentimentAnalyzer | None = None,
) -> dict[str, Any]:
    """
    Quick prediction for a single text, optionally preprocessed first.

    Text statistics are computed on the original text.

    Raises:
        InvalidInputError: If ``text`` is empty
    """
    if not text or not isinstance(text, str):
        raise InvalidInputError("Text is required")

    analyzer = analyzer or default_analyzer()
    processed = preprocess_text(text, PreprocessOptions(locale=locale)) if preprocess else text

    return {
        "ok": True,
        "input": {
            "original": text,
            "processed": processed,
            "stats": get_text_stats(text).to_dict(),
        },
        "prediction": analyzer.analyze(processed).to_dict(),
    }


async def export_reviews(
    kind: SourceKind | str,
    records: Any,
    app_info: AppInfo,
    coordinator: ExportSinkCoordinator,
    rating_filter: int | None = None,
    limit: int | None = None,
    analyzer: SentimentAnalyzer | None = None,
    preview_size: int = PREVIEW_SIZE,
) -> dict[str, Any]:
    """
    Normalize raw records, score them, export CSV and report everything.

    Malformed records are skipped and listed under ``errors``. Upload
    failures only affect the ``csv`` section.

    Args:
        kind: Source of the raw records
        records: Raw records as fetched from the source
        app_info: App metadata for the CSV
        coordinator: Export coordinator holding the sink configuration
        rating_filter: Keep only reviews with this star rating
        limit: Keep at most this many records (applied before normalizing)
        analyzer: Analyzer to use (shared default if omitted)
        preview_size: Number of reviews in ``preview``

    Raises:
        InvalidInputError: If ``records`` is not a list or the source is unknown
    """
    kind = _source_kind(kind)

    if limit is not None and isinstance(records, Sequence) and not isinstance(records, (str, bytes)):
        records = records[:limit]

    batch = normalize_batch(kind, records)
    reviews = batch.reviews
    if rating_filter is not None:
        reviews = [r for r in reviews if r.rating == rating_filter]
        logger.info(f"[service] {len(reviews)} reviews left after rating filter {rating_filter}")

    analyzed = analyze_reviews(reviews, DEFAULT_TEXT_FIELD, analyzer)

    csv_text = to_csv(analyzed, app_info, columns_for(kind))
    outcome = await coordinator.export(csv_text, kind.value, app_info.app_id)

    serialized = [r.to_dict() for r in analyzed]
    return {
        "ok": True,
        "jobId": outcome.job_id,
        "source": kind.value,
        "count": len(analyzed),
        "reviews": serialized,
        "preview": serialized[:preview_size],
        "stats": get_rating_stats(analyzed).to_dict(),
        "sentimentStats": get_stats(sentiments_of(analyzed)).to_dict(),
        "errors": batch.errors,
        "csv": outcome.to_dict(),
    }


def _source_kind(kind: SourceKind | str) -> SourceKind:
    try:
        return SourceKind.parse(kind)
    except ValueError as e:
        raise InvalidInputError(str(e)) from e
