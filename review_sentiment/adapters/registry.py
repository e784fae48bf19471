"""Source adapter dispatch table."""

from collections.abc import Sequence
from typing import Any, Callable

from loguru import logger

from review_sentiment.adapters.app_store import normalize_app_store
from review_sentiment.adapters.play_store import normalize_play_store
from review_sentiment.adapters.twitter import normalize_twitter
from review_sentiment.exceptions import InvalidInputError, MalformedRecordError
from review_sentiment.models.review import NormalizedBatch, Review
from review_sentiment.models.source import SourceKind

Adapter = Callable[[Any, int], Review]

ADAPTERS: dict[SourceKind, Adapter] = {
    SourceKind.PLAY_STORE: normalize_play_store,
    SourceKind.APP_STORE: normalize_app_store,
    SourceKind.TWITTER: normalize_twitter,
}


def get_adapter(kind: SourceKind | str) -> Adapter:
    """
    Get the adapter function for a source.

    Args:
        kind: Source kind or its name (e.g. ``"playstore"``)

    Returns:
        Adapter function ``(record, index) -> Review``

    Raises:
        InvalidInputError: If the source is unknown
    """
    try:
        return ADAPTERS[SourceKind.parse(kind)]
    except ValueError as e:
        raise InvalidInputError(str(e)) from e


def list_sources() -> list[str]:
    """Get the names of all sources with an adapter."""
    return [kind.value for kind in ADAPTERS]


def normalize_record(kind: SourceKind | str, record: Any, index: int) -> Review:
    """Normalize one raw record."""
    return get_adapter(kind)(record, index)


def normalize_batch(kind: SourceKind | str, records: Any) -> NormalizedBatch:
    """
    Normalize a batch of raw records.

    Malformed records are skipped and listed in ``errors``; the rest of the
    batch is still processed.

    Args:
        kind: Source kind
        records: Sequence of raw records

    Returns:
        NormalizedBatch with reviews in input order

    Raises:
        InvalidInputError: If ``records`` is not a sequence or the source is unknown
    """
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        raise InvalidInputError("Records must be a list of objects")

    adapter = get_adapter(kind)
    batch = NormalizedBatch()

    for index, record in enumerate(records):
        try:
            batch.add(adapter(record, index))
        except MalformedRecordError as e:
            logger.warning(f"[adapters] Skipping record: {e}")
            batch.add_error(index, e.reason)

    logger.debug(
        f"[adapters] Normalized {len(batch.reviews)}/{len(records)} {SourceKind.parse(kind).value} records"
    )
    return batch
