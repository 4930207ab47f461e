"""Infrastructure exports."""

from r2_storage.infrastructure.interfaces import ObjectStorage
from r2_storage.infrastructure.r2_storage import R2StorageClient

__all__ = [
    "ObjectStorage",
    "R2StorageClient",
]
