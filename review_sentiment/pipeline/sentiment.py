"""Lexicon-based sentiment scoring."""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from loguru import logger

from review_sentiment.exceptions import InvalidInputError
from review_sentiment.models.sentiment import SentimentLabel, SentimentResult
from review_sentiment.pipeline.rounding import round_half_up

LEXICON_FILE = Path(__file__).parent.parent / "resources" / "lexicon.yaml"

_PUNCTUATION = re.compile(r"[^\w\s'\-]")


@dataclass(frozen=True)
class Lexicon:
    """
    Immutable term polarity table.

    Safe to share between requests: ``terms`` is a read-only mapping and
    ``negators`` a frozenset.
    """
    terms: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    negators: frozenset[str] = frozenset()

    def __len__(self) -> int:
        return len(self.terms)

    def polarity(self, term: str) -> int:
        """Polarity of a term, 0 when unknown."""
        return self.terms.get(term, 0)

    @classmethod
    def from_mapping(
        cls,
        terms: Mapping[str, int],
        negators: Sequence[str] = (),
    ) -> "Lexicon":
        """Build a lexicon from plain Python values."""
        return cls(
            terms=MappingProxyType({str(k).lower(): int(v) for k, v in terms.items()}),
            negators=frozenset(str(n).lower() for n in negators),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Lexicon":
        """
        Load a lexicon file.

        The file has ``terms`` and ``negators`` sections keyed by language;
        all languages are merged into one table.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Lexicon file not found: {path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        terms: dict[str, int] = {}
        for language_terms in (data.get("terms") or {}).values():
            terms.update(language_terms or {})

        negators: list[str] = []
        for language_negators in (data.get("negators") or {}).values():
            negators.extend(language_negators or [])

        lexicon = cls.from_mapping(terms, negators)
        logger.debug(f"[sentiment] Loaded {len(lexicon)} terms from {path.name}")
        return lexicon


@lru_cache(maxsize=1)
def default_lexicon() -> Lexicon:
    """The bundled English + Indonesian lexicon."""
    return Lexicon.from_yaml(LEXICON_FILE)


def score_tokens(text: str) -> list[str]:
    """Split text into scoring tokens (lowercase, punctuation removed)."""
    text = _PUNCTUATION.sub(" ", text.lower()).replace("'", "")
    return text.split()


class SentimentAnalyzer:
    """
    Scores text by summing the polarity of matched lexicon terms.

    A term right after a negator counts with the opposite sign.
    The analyzer holds no mutable state.
    """

    def __init__(self, lexicon: Lexicon | None = None):
        self.lexicon = lexicon or default_lexicon()

    def analyze(self, text: str | None) -> SentimentResult:
        """
        Analyze a single text.

        Empty or whitespace-only text returns the neutral zero result without
        touching the lexicon.

        Args:
            text: Text to score

        Returns:
            SentimentResult with label, score, confidence and comparative score
        """
        if not text or not text.strip():
            return SentimentResult.neutral()

        tokens = score_tokens(text)
        score = 0
        positive: list[str] = []
        negative: list[str] = []

        for i, token in enumerate(tokens):
            polarity = self.lexicon.polarity(token)
            if polarity == 0:
                continue
            if i > 0 and tokens[i - 1] in self.lexicon.negators:
                polarity = -polarity

            if polarity > 0:
                positive.append(token)
            else:
                negative.append(token)
            score += polarity

        if score > 0:
            label = SentimentLabel.POSITIVE
        elif score < 0:
            label = SentimentLabel.NEGATIVE
        else:
            label = SentimentLabel.NEUTRAL

        comparative = score / len(tokens) if tokens else 0.0

        return SentimentResult(
            label=label,
            score=score,
            confidence=round_half_up(min(abs(score) / 10, 1.0), 2),
            comparative=round_half_up(comparative, 3),
            positive_terms=tuple(positive),
            negative_terms=tuple(negative),
            tokens=tuple(tokens),
        )

    def analyze_batch(self, texts: Any) -> list[SentimentResult]:
        """
        Analyze a list of texts, keeping input order.

        Raises:
            InvalidInputError: If ``texts`` is not a list of texts
        """
        if not isinstance(texts, Sequence) or isinstance(texts, (str, bytes)):
            raise InvalidInputError("Input must be an array of texts")

        return [self.analyze(_as_text(text)) for text in texts]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@lru_cache(maxsize=1)
def default_analyzer() -> SentimentAnalyzer:
    """Shared analyzer over the bundled lexicon."""
    return SentimentAnalyzer()


def analyze(text: str | None) -> SentimentResult:
    """Analyze one text with the shared analyzer."""
    return default_analyzer().analyze(text)


def analyze_batch(texts: Any) -> list[SentimentResult]:
    """Analyze a batch of texts with the shared analyzer."""
    return default_analyzer().analyze_batch(texts)
