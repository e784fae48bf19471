"""CSV export, blob storage sinks and the export coordinator."""

from review_sentiment.storage.blob_storage import (
    AppwriteBlobStorage,
    BlobStorage,
    DisabledBlobStorage,
    UploadedFile,
    create_blob_storage,
)
from review_sentiment.storage.csv_export import (
    APP_STORE_COLUMNS,
    PLAY_STORE_COLUMNS,
    TWITTER_COLUMNS,
    CsvColumn,
    columns_for,
    escape_csv_field,
    split_csv_line,
    to_csv,
)
from review_sentiment.storage.export_sink import (
    ExportOutcome,
    ExportSinkCoordinator,
    ExportState,
    export_file_name,
)

__all__ = [
    "APP_STORE_COLUMNS",
    "AppwriteBlobStorage",
    "BlobStorage",
    "CsvColumn",
    "DisabledBlobStorage",
    "ExportOutcome",
    "ExportSinkCoordinator",
    "ExportState",
    "PLAY_STORE_COLUMNS",
    "TWITTER_COLUMNS",
    "UploadedFile",
    "columns_for",
    "create_blob_storage",
    "escape_csv_field",
    "export_file_name",
    "split_csv_line",
    "to_csv",
]
