"""Canonical review data model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from review_sentiment.models.sentiment import SentimentResult


class Review(BaseModel):
    """
    Source-agnostic review produced by the source adapters.

    ``rating`` is kept exactly as the source reported it. Values outside 1-5
    are not clamped; they are only left out of the star histogram.
    Sentiment lives in its own field and never touches ``rating``.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique identifier within a batch")
    user_name: str = Field(default="", alias="userName")
    date: str = Field(default="", description="ISO-8601 or source-native date string")
    rating: int = Field(default=0, description="Star rating as reported by the source")
    review_text: str = Field(default="", alias="reviewText")

    # Source-specific optional fields (title, version, thumbsUp, ...)
    extras: dict[str, Any] = Field(default_factory=dict)

    sentiment: SentimentResult | None = None

    def with_sentiment(self, result: SentimentResult) -> "Review":
        """Return a copy with ``result`` attached, leaving this review untouched."""
        return self.model_copy(update={"sentiment": result})

    def get_field(self, name: str, default: Any = None) -> Any:
        """
        Look up a field by canonical name, JSON alias, or extras key.

        Args:
            name: Field name such as ``reviewText``, ``review_text`` or ``title``
            default: Value returned when nothing matches

        Returns:
            The field value or ``default``
        """
        for field_name, info in type(self).model_fields.items():
            if name in (field_name, info.alias):
                return getattr(self, field_name)
        return self.extras.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        """
        Flatten to the JSON shape callers consume.

        Extras are merged into the top level, matching the per-source
        response shape (``thumbsUp``, ``replyText``, ...).
        """
        data = self.model_dump(by_alias=True, mode="json", exclude={"extras", "sentiment"})
        data.update(self.extras)
        if self.sentiment is not None:
            data["sentiment"] = self.sentiment.to_dict()
        return data


class NormalizedBatch(BaseModel):
    """Reviews produced from one batch of raw records, plus the records that failed."""

    reviews: list[Review] = Field(default_factory=list)
    errors: list[dict[str, Any]] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.reviews)

    def add(self, review: Review) -> None:
        """Add a review to the batch."""
        self.reviews.append(review)

    def add_error(self, index: int, message: str) -> None:
        """Record a skipped raw record."""
        self.errors.append({"index": index, "error": message})
