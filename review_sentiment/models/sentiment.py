"""Sentiment and statistics data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SentimentLabel(str, Enum):
    """Sentiment classes derived from the sign of the lexicon score."""
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


class SentimentResult(BaseModel):
    """
    Sentiment of a single text.

    ``confidence`` is ``min(|score| / 10, 1)``: a coarse linear scaling of the
    raw score, not a probability.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: SentimentLabel
    score: int = 0
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    comparative: float = 0.0
    positive_terms: tuple[str, ...] = Field(default=(), alias="positiveTerms")
    negative_terms: tuple[str, ...] = Field(default=(), alias="negativeTerms")
    tokens: tuple[str, ...] = ()

    @classmethod
    def neutral(cls) -> "SentimentResult":
        """The zero result used for empty text."""
        return cls(label=SentimentLabel.NEUTRAL)

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dict."""
        return self.model_dump(by_alias=True, mode="json")


class SentimentDistribution(BaseModel):
    """Label percentages as strings with two decimals."""

    positive: str = "0.00"
    negative: str = "0.00"
    neutral: str = "0.00"


class BatchStats(BaseModel):
    """Aggregate sentiment statistics for one batch."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    distribution: SentimentDistribution = Field(default_factory=SentimentDistribution)
    avg_score: float = Field(default=0.0, alias="avgScore")
    avg_confidence: float = Field(default=0.0, alias="avgConfidence")

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class RatingStats(BaseModel):
    """Star rating summary; the histogram only counts ratings 1-5."""

    model_config = ConfigDict(populate_by_name=True)

    avg_rating: float = Field(default=0.0, alias="avgRating")
    rating_distribution: dict[str, int] = Field(
        default_factory=lambda: {str(star): 0 for star in range(1, 6)},
        alias="ratingDistribution",
    )

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class TextStats(BaseModel):
    """Basic counts for a piece of text."""

    model_config = ConfigDict(populate_by_name=True)

    words: int = 0
    chars: int = 0
    sentences: int = 0
    avg_word_length: float = Field(default=0.0, alias="avgWordLength")

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
