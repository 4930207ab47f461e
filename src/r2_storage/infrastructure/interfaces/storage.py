"""Abstract interface for object storage operations."""

from abc import ABC, abstractmethod


class ObjectStorage(ABC):
    """Abstract base class for a storage backend bound to one bucket."""

    @property
    @abstractmethod
    def bucket_name(self) -> str:
        """The bucket every operation targets."""

    @abstractmethod
    async def create_bucket(self) -> None:
        """
        Creates the bucket.

        Raises:
            BucketOperationError: If the request fails.
        """

    @abstractmethod
    async def delete_bucket(self) -> None:
        """
        Deletes the bucket.

        Raises:
            BucketOperationError: If the request fails.
        """

    @abstractmethod
    async def bucket_exists(self) -> bool:
        """
        Checks whether the bucket exists.

        Raises:
            BucketOperationError: If the request fails.
        """

    @abstractmethod
    async def put_object(self, key: str, body: bytes) -> str:
        """
        Uploads an object.

        Args:
            key: The object key.
            body: The object contents.

        Returns:
            The key the object was stored under.

        Raises:
            ObjectOperationError: If the upload fails.
        """

    @abstractmethod
    async def get_object(self, key: str) -> bytes:
        """
        Downloads an object into memory.

        Raises:
            ObjectOperationError: If the download fails or the key is missing.
        """

    @abstractmethod
    async def delete_object(self, key: str) -> bool:
        """
        Deletes an object.

        Raises:
            ObjectOperationError: If the request fails.
        """

    @abstractmethod
    async def list_keys(self, prefix: str | None = None) -> list[str]:
        """
        Lists every key in the bucket.

        Raises:
            ObjectOperationError: If any page request fails.
        """

    @abstractmethod
    async def download_file(self, key: str, destination: str) -> str:
        """
        Streams an object into a file under a local directory.

        Args:
            key: The object key, which may contain ``/`` separators.
            destination: An existing local directory.

        Returns:
            Path of the written file.

        Raises:
            InvalidDestinationError: If the destination or derived path is unusable.
            ObjectOperationError: If the request fails.
            DownloadWriteError: If writing to disk fails.
        """
