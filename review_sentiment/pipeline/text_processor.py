"""Text cleaning, stopword removal, tokenization and basic text statistics."""

import re
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path

import yaml
from loguru import logger

from review_sentiment.models.sentiment import TextStats
from review_sentiment.pipeline.rounding import round_half_up

STOPWORDS_FILE = Path(__file__).parent.parent / "resources" / "stopwords.yaml"

# Anything outside ASCII letters, digits and whitespace. Non-ASCII letters
# (accents, other scripts) are dropped too.
_SPECIAL_CHARS = re.compile(r"[^A-Za-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_SENTENCE_END = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class PreprocessOptions:
    """Preprocessing switches; every step is on by default."""
    lowercase: bool = True
    remove_special_chars: bool = True
    remove_stopwords: bool = True
    locale: str = "id"


def load_stopwords(locale: str = "id") -> frozenset[str]:
    """
    Get the stopword set for a locale.

    ``"id"`` selects the Indonesian list, any other locale the English one.
    """
    return _load_stopword_list("id" if locale == "id" else "en")


@lru_cache(maxsize=2)
def _load_stopword_list(key: str) -> frozenset[str]:
    with open(STOPWORDS_FILE, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    words = frozenset(str(data.get(key, "")).split())
    logger.debug(f"[text] Loaded {len(words)} stopwords for locale '{key}'")
    return words


def clean_text(text: str | None) -> str:
    """Lowercase, strip special characters and collapse whitespace."""
    if not text:
        return ""
    cleaned = _SPECIAL_CHARS.sub("", text.lower())
    return _WHITESPACE.sub(" ", cleaned).strip()


def remove_stopwords(text: str | None, locale: str = "id") -> str:
    """Drop tokens that exactly match a stopword of the locale."""
    if not text:
        return ""
    stopwords = load_stopwords(locale)
    return " ".join(word for word in text.split() if word not in stopwords)


def preprocess(text: str | None, options: PreprocessOptions | None = None, **kwargs) -> str:
    """
    Full preprocessing pipeline.

    Steps run in a fixed order when enabled: lowercase, strip special
    characters and collapse whitespace, remove stopwords.

    Args:
        text: Input text (None and "" give "")
        options: Preprocessing options
        **kwargs: Overrides for individual option fields

    Returns:
        Preprocessed, trimmed text
    """
    if not text:
        return ""

    options = options or PreprocessOptions()
    if kwargs:
        options = replace(options, **kwargs)

    processed = text

    if options.lowercase:
        processed = processed.lower()

    if options.remove_special_chars:
        processed = _SPECIAL_CHARS.sub("", processed)
        processed = _WHITESPACE.sub(" ", processed)

    if options.remove_stopwords:
        processed = remove_stopwords(processed, options.locale)

    return processed.strip()


def tokenize(text: str | None) -> list[str]:
    """Lowercase and split on whitespace, dropping empty tokens."""
    if not text:
        return []
    return text.lower().split()


def get_stats(text: str | None) -> TextStats:
    """
    Word, character and sentence counts of the original text.

    Sentences are the non-empty segments between runs of ``.``, ``!`` and ``?``.
    """
    if not text:
        return TextStats()

    words = tokenize(text)
    sentences = [s for s in _SENTENCE_END.split(text) if s.strip()]

    avg_word_length = 0.0
    if words:
        avg_word_length = round_half_up(sum(len(w) for w in words) / len(words), 2)

    return TextStats(
        words=len(words),
        chars=len(text),
        sentences=len(sentences),
        avg_word_length=avg_word_length,
    )
