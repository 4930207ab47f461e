"""Infrastructure interface exports."""

from r2_storage.infrastructure.interfaces.storage import ObjectStorage

__all__ = [
    "ObjectStorage",
]
