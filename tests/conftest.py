"""Pytest configuration and fixtures."""

import pytest

from review_sentiment.models.review import Review
from review_sentiment.models.source import AppInfo
from review_sentiment.storage.blob_storage import BlobStorage, UploadedFile
from review_sentiment.exceptions import UploadError


@pytest.fixture
def play_store_records():
    """Raw google-play-scraper records with ratings [5, 5, 4, 1, 3]."""
    return [
        {
            "id": "gp-1",
            "userName": "Budi",
            "userImage": "https://example.com/budi.png",
            "date": "2024-05-01T10:00:00.000Z",
            "score": 5,
            "text": "Aplikasi ini bagus sekali",
            "replyDate": "2024-05-02T08:00:00.000Z",
            "replyText": "Terima kasih, Budi!",
            "thumbsUp": 12,
            "version": "2.1.0",
        },
        {
            "id": "gp-2",
            "userName": "Sari",
            "date": "2024-05-01T11:00:00.000Z",
            "score": 5,
            "text": "Great app, love it",
            "thumbsUp": 3,
            "version": "2.1.0",
        },
        {
            "id": "gp-3",
            "userName": "Andi",
            "date": "2024-05-02T09:30:00.000Z",
            "score": 4,
            "text": 'Good, but the "dark mode" is missing',
        },
        {
            "userName": "Rina",
            "date": "2024-05-03T12:00:00.000Z",
            "score": 1,
            "text": "Aplikasi ini buruk",
        },
        {
            "id": "gp-5",
            "userName": "",
            "date": "2024-05-04T15:45:00.000Z",
            "score": 3,
            "text": "",
        },
    ]


@pytest.fixture
def app_store_records():
    """Raw app-store-scraper records."""
    return [
        {
            "id": "as-1",
            "userName": "appfan",
            "date": "2024-04-20T00:00:00Z",
            "score": 5,
            "title": "Mantap",
            "text": "Sangat membantu dan cepat",
            "version": "5.3",
        },
        {
            "id": "as-2",
            "userName": "grumpy",
            "date": "2024-04-21T00:00:00Z",
            "score": 2,
            "title": "Slow, buggy",
            "text": "The app is slow and buggy",
        },
    ]


@pytest.fixture
def tweet_records():
    """Raw scraped tweets."""
    return [
        {
            "id": "1790000000000000001",
            "text": "Loving the new update, great job!",
            "username": "techie",
            "photos": ["https://example.com/p.jpg"],
            "timeParsed": "2024-05-10T07:00:00+00:00",
            "likes": 10,
            "retweets": 2,
            "replies": 1,
            "permanentUrl": "https://x.com/techie/status/1790000000000000001",
        },
        {
            "text": "worst update ever",
            "createdAt": "2024-05-11T07:00:00+00:00",
        },
    ]


@pytest.fixture
def sample_review():
    """A canonical review with extras."""
    return Review(
        id="review-0",
        user_name="Test User",
        date="2024-01-01",
        rating=4,
        review_text="Nice app, but it crashes sometimes.",
        extras={"thumbsUp": 2, "version": "1.0"},
    )


@pytest.fixture
def app_info():
    return AppInfo(title="Test App", app_id="com.example.app")


class RecordingStorage(BlobStorage):
    """Sink that succeeds and remembers what it saw."""

    def __init__(self):
        self.calls = []

    def is_enabled(self) -> bool:
        return True

    async def upload(self, local_path, desired_name):
        with open(local_path, encoding="utf-8") as f:
            content = f.read()
        self.calls.append((str(local_path), desired_name, content))
        return UploadedFile(
            id="file-123",
            name=desired_name,
            url="https://storage.example.com/file-123/download",
            size=len(content),
            created_at="2024-05-05T00:00:00.000+00:00",
        )


class FailingStorage(BlobStorage):
    """Sink that is enabled but always fails."""

    def __init__(self):
        self.attempts = 0

    def is_enabled(self) -> bool:
        return True

    async def upload(self, local_path, desired_name):
        self.attempts += 1
        raise UploadError("bucket unavailable")


@pytest.fixture
def recording_storage():
    return RecordingStorage()


@pytest.fixture
def failing_storage():
    return FailingStorage()
