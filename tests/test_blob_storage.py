"""Tests for blob storage sinks."""

import asyncio
from types import SimpleNamespace

import httpx
import pytest

from review_sentiment.core.retry_handler import RetryHandler
from review_sentiment.exceptions import UploadError
from review_sentiment.storage.blob_storage import (
    AppwriteBlobStorage,
    DisabledBlobStorage,
    create_blob_storage,
)

ENDPOINT = "https://cloud.appwrite.test/v1"


def _storage(handler, max_retries=0, **overrides) -> AppwriteBlobStorage:
    config = {
        "endpoint": ENDPOINT,
        "project_id": "proj",
        "api_key": "secret",
        "bucket_id": "bucket",
    }
    config.update(overrides)
    return AppwriteBlobStorage(
        **config,
        timeout=5,
        retry_handler=RetryHandler(max_retries=max_retries, base_delay=0),
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    return path


class TestAppwriteBlobStorage:
    """Tests for the Appwrite REST sink."""

    def test_upload(self, csv_file):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["project"] = request.headers["X-Appwrite-Project"]
            seen["key"] = request.headers["X-Appwrite-Key"]
            seen["body"] = request.read()
            return httpx.Response(201, json={
                "$id": "f1",
                "name": "playstore-x-1.csv",
                "sizeOriginal": 8,
                "$createdAt": "2024-05-05T00:00:00.000+00:00",
            })

        uploaded = asyncio.run(_storage(handler).upload(csv_file, "playstore-x-1.csv"))

        assert seen["url"] == f"{ENDPOINT}/storage/buckets/bucket/files"
        assert seen["project"] == "proj"
        assert seen["key"] == "secret"
        assert b"playstore-x-1.csv" in seen["body"]
        assert b"1,2" in seen["body"]

        assert uploaded.id == "f1"
        assert uploaded.name == "playstore-x-1.csv"
        assert uploaded.size == 8
        assert uploaded.created_at == "2024-05-05T00:00:00.000+00:00"
        assert uploaded.url == f"{ENDPOINT}/storage/buckets/bucket/files/f1/download?project=proj"

    def test_upload_keeps_local_file(self, csv_file):
        """Deleting the scratch file is left to the coordinator."""
        handler = lambda request: httpx.Response(201, json={"$id": "f1", "name": "n"})
        asyncio.run(_storage(handler).upload(csv_file, "n"))
        assert csv_file.exists()

    def test_retries_transient_errors(self, csv_file):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                return httpx.Response(503)
            return httpx.Response(201, json={"$id": "f2", "name": "n"})

        uploaded = asyncio.run(_storage(handler, max_retries=2).upload(csv_file, "n"))
        assert uploaded.id == "f2"
        assert len(calls) == 2

    def test_gives_up_after_retries(self, csv_file):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        with pytest.raises(UploadError):
            asyncio.run(_storage(handler, max_retries=1).upload(csv_file, "n"))
        assert len(calls) == 2

    def test_client_errors_not_retried(self, csv_file):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(401, json={"message": "unauthorized"})

        with pytest.raises(UploadError):
            asyncio.run(_storage(handler, max_retries=3).upload(csv_file, "n"))
        assert len(calls) == 1

    def test_network_error(self, csv_file):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UploadError, match="Failed to upload file"):
            asyncio.run(_storage(handler).upload(csv_file, "n"))

    def test_missing_file_id(self, csv_file):
        handler = lambda request: httpx.Response(201, json={"name": "n"})
        with pytest.raises(UploadError):
            asyncio.run(_storage(handler).upload(csv_file, "n"))

    @pytest.mark.parametrize("body", [["not", "an", "object"], "ok", None])
    def test_non_object_response(self, csv_file, body):
        handler = lambda request: httpx.Response(201, json=body)
        with pytest.raises(UploadError):
            asyncio.run(_storage(handler).upload(csv_file, "n"))

    def test_invalid_json_response(self, csv_file):
        handler = lambda request: httpx.Response(201, content=b"<html>")
        with pytest.raises(UploadError, match="Failed to upload file"):
            asyncio.run(_storage(handler).upload(csv_file, "n"))

    def test_missing_config_disables(self, csv_file):
        storage = _storage(lambda request: httpx.Response(201), api_key=None)
        assert storage.is_enabled() is False
        with pytest.raises(UploadError):
            asyncio.run(storage.upload(csv_file, "n"))

    def test_enabled_with_full_config(self):
        assert _storage(lambda request: httpx.Response(201)).is_enabled() is True


class TestDisabledBlobStorage:
    def test_disabled(self, csv_file):
        storage = DisabledBlobStorage()
        assert storage.is_enabled() is False
        with pytest.raises(UploadError):
            asyncio.run(storage.upload(csv_file, "n"))


class TestCreateBlobStorage:
    """Tests for building a sink from settings."""

    def _settings(self, **overrides):
        values = {
            "upload_enabled": True,
            "appwrite_endpoint": ENDPOINT,
            "appwrite_project_id": "proj",
            "appwrite_api_key": "secret",
            "appwrite_bucket_id": "bucket",
            "upload_timeout": 12.0,
            "upload_max_retries": 4,
        }
        values.update(overrides)
        return SimpleNamespace(**values)

    def test_disabled(self):
        assert isinstance(create_blob_storage(self._settings(upload_enabled=False)), DisabledBlobStorage)

    def test_appwrite(self):
        storage = create_blob_storage(self._settings())
        assert isinstance(storage, AppwriteBlobStorage)
        assert storage.is_enabled()
        assert storage.timeout == 12.0
        assert storage.retry_handler.max_retries == 4


class TestRetryHandler:
    """Tests for the retry handler."""

    def test_returns_result(self):
        async def ok():
            return 42

        assert asyncio.run(RetryHandler(max_retries=1, base_delay=0).execute(ok)) == 42

    def test_retries_timeouts(self):
        attempts = []

        async def flaky():
            attempts.append(1)
            if len(attempts) < 3:
                raise httpx.ReadTimeout("slow")
            return "done"

        assert asyncio.run(RetryHandler(max_retries=2, base_delay=0).execute(flaky)) == "done"
        assert len(attempts) == 3

    def test_other_errors_propagate(self):
        async def broken():
            raise ValueError("nope")

        with pytest.raises(ValueError):
            asyncio.run(RetryHandler(max_retries=3, base_delay=0).execute(broken))

    def test_delay_bounded(self):
        handler = RetryHandler(base_delay=1.0, max_delay=3.0)
        assert all(0 <= handler._calculate_delay(attempt) <= 3.0 for attempt in range(10))
