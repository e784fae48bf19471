"""Blob storage sinks for exported CSV files."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import aiofiles
import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from review_sentiment.core.retry_handler import RetryHandler
from review_sentiment.exceptions import UploadError


class UploadedFile(BaseModel):
    """What the sink reports back about a stored file."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    url: str
    size: int | None = None
    created_at: str | None = Field(default=None, alias="createdAt")


class BlobStorage(ABC):
    """Interface of an external blob store that keeps exported files."""

    @abstractmethod
    def is_enabled(self) -> bool:
        """Whether uploads should be attempted at all."""
        pass

    @abstractmethod
    async def upload(self, local_path: str | Path, desired_name: str) -> UploadedFile:
        """
        Upload a local file.

        Args:
            local_path: File to upload
            desired_name: Name to store it under

        Returns:
            UploadedFile with the sink-assigned id and download URL

        Raises:
            UploadError: If the upload failed
        """
        pass


class DisabledBlobStorage(BlobStorage):
    """No-op sink used when uploads are turned off."""

    def is_enabled(self) -> bool:
        return False

    async def upload(self, local_path: str | Path, desired_name: str) -> UploadedFile:
        raise UploadError("Blob storage upload is disabled")


class AppwriteBlobStorage(BlobStorage):
    """
    Appwrite Storage bucket sink over its REST API.

    Requests use an explicit timeout and are retried on transient failures.
    The sink never deletes the local file; that is the export coordinator's job.
    """

    def __init__(
        self,
        endpoint: str | None,
        project_id: str | None,
        api_key: str | None,
        bucket_id: str | None,
        timeout: float = 30.0,
        retry_handler: RetryHandler | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = (endpoint or "").rstrip("/")
        self.project_id = project_id or ""
        self.api_key = api_key or ""
        self.bucket_id = bucket_id or ""
        self.timeout = timeout
        self.retry_handler = retry_handler or RetryHandler()
        self._transport = transport

        missing = [
            name for name, value in [
                ("APPWRITE_ENDPOINT", self.endpoint),
                ("APPWRITE_PROJECT_ID", self.project_id),
                ("APPWRITE_API_KEY", self.api_key),
                ("APPWRITE_BUCKET_ID", self.bucket_id),
            ]
            if not value
        ]
        self._enabled = not missing
        if missing:
            logger.warning(f"[storage] Missing Appwrite config: {', '.join(missing)}; upload disabled")

    def is_enabled(self) -> bool:
        return self._enabled

    def download_url(self, file_id: str) -> str:
        """Public download URL of a stored file."""
        return (
            f"{self.endpoint}/storage/buckets/{self.bucket_id}/files/{file_id}/download"
            f"?project={self.project_id}"
        )

    async def upload(self, local_path: str | Path, desired_name: str) -> UploadedFile:
        if not self._enabled:
            raise UploadError("Appwrite upload is not configured")

        try:
            async with aiofiles.open(local_path, "rb") as f:
                content = await f.read()

            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            ) as client:
                response = await self.retry_handler.execute(
                    self._post_file, client, desired_name, content
                )
            uploaded = self._parse_file(response.json(), desired_name)

        except UploadError:
            raise
        except Exception as e:
            logger.error(f"[storage] Error uploading {desired_name} to Appwrite: {e}")
            raise UploadError(f"Failed to upload file: {e}") from e

        logger.info(f"[storage] File uploaded to Appwrite: {uploaded.name}")
        return uploaded

    async def _post_file(
        self,
        client: httpx.AsyncClient,
        desired_name: str,
        content: bytes,
    ) -> httpx.Response:
        """Make the actual upload request."""
        response = await client.post(
            f"{self.endpoint}/storage/buckets/{self.bucket_id}/files",
            headers={
                "X-Appwrite-Project": self.project_id,
                "X-Appwrite-Key": self.api_key,
            },
            data={"fileId": "unique()"},
            files={"file": (desired_name, content, "text/csv")},
        )
        response.raise_for_status()
        return response

    def _parse_file(self, data: Any, desired_name: str) -> UploadedFile:
        if not isinstance(data, dict):
            raise UploadError(f"Unexpected Appwrite response: {data!r}")

        file_id = data.get("$id")
        if not file_id:
            raise UploadError("Appwrite response did not include a file id")

        return UploadedFile(
            id=str(file_id),
            name=data.get("name") or desired_name,
            url=self.download_url(str(file_id)),
            size=data.get("sizeOriginal"),
            created_at=data.get("$createdAt"),
        )


def create_blob_storage(settings) -> BlobStorage:
    """
    Build the sink described by the settings.

    Args:
        settings: Application settings (``config.settings.Settings``)

    Returns:
        AppwriteBlobStorage when uploads are enabled, otherwise DisabledBlobStorage
    """
    if not settings.upload_enabled:
        logger.info("[storage] Blob storage upload is disabled")
        return DisabledBlobStorage()

    return AppwriteBlobStorage(
        endpoint=settings.appwrite_endpoint,
        project_id=settings.appwrite_project_id,
        api_key=settings.appwrite_api_key,
        bucket_id=settings.appwrite_bucket_id,
        timeout=settings.upload_timeout,
        retry_handler=RetryHandler(max_retries=settings.upload_max_retries),
    )
