"""Export coordinator: write locally, upload if possible, always clean up."""

import re
import uuid
from enum import Enum
from pathlib import Path

import aiofiles
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from review_sentiment.storage.blob_storage import BlobStorage, DisabledBlobStorage

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class ExportState(str, Enum):
    """Lifecycle of one export."""
    GENERATED = "generated"
    UPLOAD_ATTEMPTED = "upload_attempted"
    UPLOAD_SKIPPED = "upload_skipped"
    CLEANED = "cleaned"


class ExportOutcome(BaseModel):
    """Result of one export. Upload fields stay None unless the upload succeeded."""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., alias="jobId")
    file_name: str = Field(..., alias="fileName")
    uploaded: bool = False
    file_id: str | None = Field(default=None, alias="fileId")
    download_url: str | None = Field(default=None, alias="downloadUrl")
    size: int | None = None
    created_at: str | None = Field(default=None, alias="createdAt")
    content: str | None = None
    error: str | None = None
    states: list[ExportState] = Field(default_factory=list)

    @property
    def state(self) -> ExportState | None:
        """Most recent lifecycle state."""
        return self.states[-1] if self.states else None

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude={"states"})


def export_file_name(source: str, app_id: str, job_id: str) -> str:
    """Build ``<source>-<appId>-<jobId>.csv`` with path-unsafe characters replaced."""
    safe_app_id = _UNSAFE_NAME_CHARS.sub("_", str(app_id)).strip("_") or "export"
    return f"{source}-{safe_app_id}-{job_id}.csv"


class ExportSinkCoordinator:
    """
    Runs one CSV export: Generated -> UploadAttempted | UploadSkipped -> Cleaned.

    The local scratch file is removed by the end of ``export`` whatever
    happened to the upload. Upload failures are reported in the outcome and
    never raised. When nothing was uploaded the CSV text is returned inline.
    """

    def __init__(
        self,
        scratch_dir: str | Path,
        storage: BlobStorage | None = None,
        include_content: bool = True,
    ):
        """
        Initialize the coordinator.

        Args:
            scratch_dir: Directory for local scratch files
            storage: Blob storage sink (uploads disabled if omitted)
            include_content: Return the CSV text when it was not uploaded
        """
        self.scratch_dir = Path(scratch_dir)
        self.storage = storage or DisabledBlobStorage()
        self.include_content = include_content

    async def export(self, csv_text: str, source: str, app_id: str) -> ExportOutcome:
        """
        Export CSV text.

        Args:
            csv_text: CSV content
            source: Source name used in the file name (e.g. ``playstore``)
            app_id: App identifier used in the file name

        Returns:
            ExportOutcome describing the upload result
        """
        job_id = str(uuid.uuid4())
        file_name = export_file_name(source, app_id, job_id)
        path = self.scratch_dir / file_name

        outcome = ExportOutcome(job_id=job_id, file_name=file_name)

        try:
            await self._write(path, csv_text)
            outcome.states.append(ExportState.GENERATED)
            logger.info(f"[export] CSV generated: {path}")

            if self.storage.is_enabled():
                outcome.states.append(ExportState.UPLOAD_ATTEMPTED)
                await self._upload(path, outcome)
            else:
                outcome.states.append(ExportState.UPLOAD_SKIPPED)
                logger.info(f"[export] Upload skipped for {file_name} (disabled)")
        finally:
            self._cleanup(path)
            outcome.states.append(ExportState.CLEANED)

        if not outcome.uploaded and self.include_content:
            outcome.content = csv_text

        return outcome

    async def _write(self, path: Path, csv_text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, "w", encoding="utf-8", newline="") as f:
            await f.write(csv_text)

    async def _upload(self, path: Path, outcome: ExportOutcome) -> None:
        """Upload and record the result; failures end up in ``outcome.error``."""
        try:
            uploaded = await self.storage.upload(path, outcome.file_name)
        except Exception as e:
            logger.error(f"[export] Upload failed for {outcome.file_name}: {e}")
            outcome.error = str(e)
            return

        outcome.uploaded = True
        outcome.file_id = uploaded.id
        outcome.download_url = uploaded.url
        outcome.size = uploaded.size
        outcome.created_at = uploaded.created_at
        logger.info(f"[export] Uploaded {outcome.file_name} as {uploaded.id}")

    def _cleanup(self, path: Path) -> None:
        """Delete the scratch file; a failure here is only logged."""
        try:
            if path.exists():
                path.unlink()
                logger.debug(f"[export] Cleaned up temp file: {path}")
        except OSError as e:
            logger.warning(f"[export] Failed to clean up temp file {path}: {e}")
