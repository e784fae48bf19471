"""Application settings loaded from environment variables."""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Literal["development", "production"] = "development"
    debug: bool = True

    # Project paths
    base_dir: Path = Field(default_factory=lambda: Path(__file__).parent.parent)

    @property
    def scratch_dir(self) -> Path:
        return self.base_dir / "tmp"

    @property
    def log_dir(self) -> Path:
        return self.base_dir / "logs"

    # Pipeline
    default_locale: str = "id"
    preview_size: int = 10

    # Blob storage upload
    upload_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices("enable_upload", "enable_appwrite", "upload_enabled"),
    )
    appwrite_endpoint: str | None = None
    appwrite_project_id: str | None = None
    appwrite_api_key: str | None = None
    appwrite_bucket_id: str | None = None
    upload_timeout: float = 30.0
    upload_max_retries: int = 2

    # Logging
    log_level: str = "INFO"
    log_file: str = "logs/pipeline.log"

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        for directory in [
            self.scratch_dir,
            self.log_dir,
        ]:
            directory.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
