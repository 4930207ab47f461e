from r2_storage.builder import R2ClientBuilder
from r2_storage.config import R2Config, load_config
from r2_storage.exceptions import (
    BucketOperationError,
    DownloadWriteError,
    InvalidConfigError,
    InvalidDestinationError,
    MissingFieldError,
    ObjectOperationError,
    R2StorageError,
)
from r2_storage.infrastructure import ObjectStorage, R2StorageClient
from r2_storage.logging import setup_logging

__all__ = [
    "setup_logging",
    "load_config",
    "R2Config",
    "R2ClientBuilder",
    "R2StorageClient",
    "ObjectStorage",
    "R2StorageError",
    "MissingFieldError",
    "InvalidConfigError",
    "BucketOperationError",
    "ObjectOperationError",
    "InvalidDestinationError",
    "DownloadWriteError",
]
