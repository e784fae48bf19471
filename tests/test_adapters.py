"""Tests for source adapters and the canonical review model."""

import pytest

from review_sentiment.adapters import (
    get_adapter,
    list_sources,
    normalize_app_store,
    normalize_batch,
    normalize_play_store,
    normalize_record,
    normalize_twitter,
)
from review_sentiment.exceptions import InvalidInputError, MalformedRecordError
from review_sentiment.models.review import Review
from review_sentiment.models.source import SourceKind
from review_sentiment.pipeline.sentiment import analyze


class TestPlayStoreAdapter:
    """Tests for the Play Store adapter."""

    def test_full_record(self, play_store_records):
        review = normalize_play_store(play_store_records[0], 0)
        assert review.id == "gp-1"
        assert review.user_name == "Budi"
        assert review.date == "2024-05-01T10:00:00.000Z"
        assert review.rating == 5
        assert review.review_text == "Aplikasi ini bagus sekali"
        assert review.extras["thumbsUp"] == 12
        assert review.extras["version"] == "2.1.0"
        assert review.extras["replyText"] == "Terima kasih, Budi!"
        assert review.extras["userImage"] == "https://example.com/budi.png"

    def test_missing_fields(self):
        """Missing optional fields get empty defaults and a synthesized id."""
        review = normalize_play_store({}, 3)
        assert review.id == "review-3"
        assert review.user_name == ""
        assert review.rating == 0
        assert review.review_text == ""
        assert review.extras == {
            "userImage": "",
            "replyDate": "",
            "replyText": "",
            "thumbsUp": 0,
            "version": "",
        }

    @pytest.mark.parametrize("record", ["oops", None, 42, ["a", "b"]])
    def test_malformed(self, record):
        with pytest.raises(MalformedRecordError) as exc_info:
            normalize_play_store(record, 7)
        assert exc_info.value.index == 7

    def test_rating_passthrough(self):
        """Ratings are never clamped."""
        assert normalize_play_store({"score": 9}, 0).rating == 9
        assert normalize_play_store({"score": -1}, 0).rating == -1

    def test_rating_coercion(self):
        assert normalize_play_store({"score": "4"}, 0).rating == 4
        assert normalize_play_store({"score": 4.0}, 0).rating == 4
        assert normalize_play_store({"score": "n/a"}, 0).rating == 0


class TestAppStoreAdapter:
    """Tests for the App Store adapter."""

    def test_full_record(self, app_store_records):
        review = normalize_app_store(app_store_records[0], 0)
        assert review.id == "as-1"
        assert review.rating == 5
        assert review.extras["title"] == "Mantap"
        assert review.extras["version"] == "5.3"
        assert review.extras["thumbsUp"] == 0

    def test_missing_version(self, app_store_records):
        review = normalize_app_store(app_store_records[1], 1)
        assert review.extras["version"] == ""


class TestTwitterAdapter:
    """Tests for the Twitter adapter."""

    def test_full_record(self, tweet_records):
        review = normalize_twitter(tweet_records[0], 0)
        assert review.id == "1790000000000000001"
        assert review.user_name == "techie"
        assert review.date == "2024-05-10T07:00:00+00:00"
        assert review.rating == 0
        assert review.extras["author"] == "techie"
        assert review.extras["profileImage"] == "https://example.com/p.jpg"
        assert review.extras["likes"] == 10
        assert review.extras["verified"] is False
        assert review.extras["url"].startswith("https://x.com/")

    def test_missing_fields(self, tweet_records):
        review = normalize_twitter(tweet_records[1], 2)
        assert review.id == "tweet-2"
        assert review.extras["author"] == "Unknown"
        assert review.extras["username"] == "unknown"
        assert review.extras["profileImage"] == ""
        assert review.date == "2024-05-11T07:00:00+00:00"

    def test_date_synthesized(self):
        assert normalize_twitter({"text": "hi"}, 0).date != ""


class TestRegistry:
    """Tests for adapter dispatch and batch normalization."""

    def test_dispatch(self):
        assert get_adapter(SourceKind.PLAY_STORE) is normalize_play_store
        assert get_adapter("google-play") is normalize_play_store
        assert get_adapter("appstore") is normalize_app_store
        assert get_adapter("X") is normalize_twitter

    def test_unknown_source(self):
        with pytest.raises(InvalidInputError):
            get_adapter("myspace")

    def test_list_sources(self):
        assert list_sources() == ["playstore", "appstore", "twitter"]

    def test_normalize_record(self, play_store_records):
        review = normalize_record("playstore", play_store_records[3], 3)
        assert review.id == "review-3"

    def test_batch_skips_malformed(self, play_store_records):
        records = [play_store_records[0], "bad", None, play_store_records[1]]
        batch = normalize_batch("playstore", records)

        assert [r.id for r in batch.reviews] == ["gp-1", "gp-2"]
        assert [e["index"] for e in batch.errors] == [1, 2]
        assert all("expected an object" in e["error"] for e in batch.errors)

    def test_batch_keeps_order(self, play_store_records):
        batch = normalize_batch(SourceKind.PLAY_STORE, play_store_records)
        assert [r.rating for r in batch.reviews] == [5, 5, 4, 1, 3]
        assert len(batch) == 5
        assert batch.errors == []

    def test_batch_keeps_model_iteration(self, play_store_records):
        batch = normalize_batch("playstore", play_store_records[:1])
        fields = dict(batch)
        assert set(fields) == {"reviews", "errors"}
        assert fields["reviews"][0].id == "gp-1"

    @pytest.mark.parametrize("records", ["text", None, {"id": 1}])
    def test_batch_rejects_non_sequences(self, records):
        with pytest.raises(InvalidInputError):
            normalize_batch("playstore", records)


class TestReviewModel:
    """Tests for the canonical Review."""

    def test_to_dict_flattens_extras(self, sample_review):
        data = sample_review.to_dict()
        assert data["userName"] == "Test User"
        assert data["reviewText"] == "Nice app, but it crashes sometimes."
        assert data["thumbsUp"] == 2
        assert "extras" not in data
        assert "sentiment" not in data

    def test_with_sentiment(self, sample_review):
        result = analyze(sample_review.review_text)
        analyzed = sample_review.with_sentiment(result)

        assert sample_review.sentiment is None
        assert analyzed.sentiment == result
        assert analyzed.rating == sample_review.rating
        assert analyzed.to_dict()["sentiment"]["label"] == result.label.value

    def test_get_field(self, sample_review):
        assert sample_review.get_field("reviewText") == sample_review.review_text
        assert sample_review.get_field("review_text") == sample_review.review_text
        assert sample_review.get_field("version") == "1.0"
        assert sample_review.get_field("missing", "x") == "x"

    def test_alias_construction(self):
        review = Review(id="1", userName="a", reviewText="b")
        assert review.user_name == "a"
        assert review.review_text == "b"
