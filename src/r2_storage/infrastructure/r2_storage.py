"""MinIO-backed implementation of the ObjectStorage interface for Cloudflare R2."""

import asyncio
import io
import logging
import os
from itertools import islice
from typing import TYPE_CHECKING

from minio import Minio

from r2_storage.config import R2Config
from r2_storage.exceptions import (
    BucketOperationError,
    DownloadWriteError,
    InvalidDestinationError,
    ObjectOperationError,
)
from r2_storage.infrastructure.interfaces import ObjectStorage
from r2_storage.minio import get_minio_client
from r2_storage.utils import DOWNLOAD_CHUNK_SIZE, LIST_PAGE_SIZE, guess_content_type

if TYPE_CHECKING:
    from r2_storage.builder import R2ClientBuilder

logger = logging.getLogger(__name__)


class R2StorageClient(ObjectStorage):
    """
    Object operations against a single R2 bucket.

    Each operation runs the blocking MinIO call on a worker thread, so many
    operations can be awaited concurrently on one client. The client holds
    no mutable state; the shared MinIO handle owns its own connection pool.
    """

    def __init__(
        self,
        client: Minio,
        bucket_name: str,
        list_page_size: int = LIST_PAGE_SIZE,
        chunk_size: int = DOWNLOAD_CHUNK_SIZE,
    ):
        self._client = client
        self._bucket_name = bucket_name
        self._list_page_size = list_page_size
        self._chunk_size = chunk_size

    @classmethod
    def builder(cls) -> "R2ClientBuilder":
        """Starts an empty R2ClientBuilder."""
        from r2_storage.builder import R2ClientBuilder

        return R2ClientBuilder()

    @classmethod
    def from_config(cls, config: R2Config) -> "R2StorageClient":
        """Wires a client to the endpoint, region and credentials in ``config``."""
        client = get_minio_client(
            config.url, config.client_id, config.secret_key, config.region
        )
        return cls(client, config.bucket_name)

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    async def create_bucket(self) -> None:
        """
        Creates the configured bucket.

        Raises:
            BucketOperationError: If the bucket exists already or the request fails.
        """
        try:
            await asyncio.to_thread(
                self._client.make_bucket, bucket_name=self._bucket_name
            )
        except Exception as e:
            logger.exception(
                "Bucket creation failed", extra={"bucket": self._bucket_name}
            )
            raise BucketOperationError("create", self._bucket_name, e) from e

        logger.info("Bucket created", extra={"bucket": self._bucket_name})

    async def delete_bucket(self) -> None:
        """
        Deletes the configured bucket, which must be empty.

        Raises:
            BucketOperationError: If the bucket is missing, not empty, or the
                request fails.
        """
        try:
            await asyncio.to_thread(
                self._client.remove_bucket, bucket_name=self._bucket_name
            )
        except Exception as e:
            logger.exception(
                "Bucket deletion failed", extra={"bucket": self._bucket_name}
            )
            raise BucketOperationError("delete", self._bucket_name, e) from e

        logger.info("Bucket deleted", extra={"bucket": self._bucket_name})

    async def bucket_exists(self) -> bool:
        """
        Checks whether the configured bucket exists.

        Returns:
            True if the bucket exists.

        Raises:
            BucketOperationError: If the request fails.
        """
        try:
            return await asyncio.to_thread(
                self._client.bucket_exists, bucket_name=self._bucket_name
            )
        except Exception as e:
            logger.exception(
                "Bucket lookup failed", extra={"bucket": self._bucket_name}
            )
            raise BucketOperationError("check", self._bucket_name, e) from e

    async def put_object(self, key: str, body: bytes) -> str:
        """
        Uploads bytes under ``key``.

        The content type is guessed from the key's extension and falls back
        to ``application/octet-stream``.

        Args:
            key: The object key.
            body: The object contents.

        Returns:
            The key the object was stored under.

        Raises:
            ObjectOperationError: If the upload fails.
        """
        content_type = guess_content_type(key)
        try:
            await asyncio.to_thread(
                self._client.put_object,
                bucket_name=self._bucket_name,
                object_name=key,
                data=io.BytesIO(body),
                length=len(body),
                content_type=content_type,
            )
        except Exception as e:
            logger.exception(
                "Upload failed",
                extra={"bucket": self._bucket_name, "object": key},
            )
            raise ObjectOperationError("put", key, e) from e

        logger.info(
            "Object uploaded",
            extra={
                "bucket": self._bucket_name,
                "object": key,
                "size": len(body),
                "content_type": content_type,
            },
        )
        return key

    async def get_object(self, key: str) -> bytes:
        """
        Downloads an object into memory.

        Args:
            key: The object key.

        Returns:
            The full object contents.

        Raises:
            ObjectOperationError: If the key is missing or the request fails.
        """
        try:
            data = await asyncio.to_thread(self._read_object, key)
        except Exception as e:
            logger.exception(
                "Download failed",
                extra={"bucket": self._bucket_name, "object": key},
            )
            raise ObjectOperationError("get", key, e) from e

        logger.info(
            "Object downloaded",
            extra={"bucket": self._bucket_name, "object": key, "size": len(data)},
        )
        return data

    async def delete_object(self, key: str) -> bool:
        """
        Deletes an object. Deleting a key that does not exist succeeds.

        Args:
            key: The object key.

        Returns:
            True once the service accepted the request.

        Raises:
            ObjectOperationError: If the request fails.
        """
        try:
            await asyncio.to_thread(
                self._client.remove_object,
                bucket_name=self._bucket_name,
                object_name=key,
            )
        except Exception as e:
            logger.exception(
                "Delete failed",
                extra={"bucket": self._bucket_name, "object": key},
            )
            raise ObjectOperationError("delete", key, e) from e

        logger.info(
            "Object deleted", extra={"bucket": self._bucket_name, "object": key}
        )
        return True

    async def list_keys(self, prefix: str | None = None) -> list[str]:
        """
        Lists every key in the bucket, page by page.

        Args:
            prefix: Only keys starting with this prefix are returned.

        Returns:
            All matching keys in service order.

        Raises:
            ObjectOperationError: If any page request fails.
        """
        keys: list[str] = []
        cursor: str | None = None

        while True:
            try:
                page = await asyncio.to_thread(self._list_page, prefix, cursor)
            except Exception as e:
                logger.exception(
                    "Listing failed",
                    extra={
                        "bucket": self._bucket_name,
                        "prefix": prefix,
                        "keys_so_far": len(keys),
                    },
                )
                raise ObjectOperationError("list", prefix or "", e) from e

            keys.extend(page)
            if len(page) < self._list_page_size:
                break
            cursor = page[-1]

        logger.info(
            "Objects listed",
            extra={"bucket": self._bucket_name, "prefix": prefix, "count": len(keys)},
        )
        return keys

    async def download_file(self, key: str, destination: str) -> str:
        """
        Streams an object into ``destination/key``.

        Intermediate directories implied by ``/`` in the key are created.

        Args:
            key: The object key.
            destination: An existing local directory.

        Returns:
            Absolute path of the written file.

        Raises:
            InvalidDestinationError: If the destination is not a directory or
                the key does not map to a file inside it.
            ObjectOperationError: If the request or the response stream fails.
            DownloadWriteError: If writing to disk fails.
        """
        target = await asyncio.to_thread(self._download_to_path, key, destination)

        logger.info(
            "Object saved to file",
            extra={"bucket": self._bucket_name, "object": key, "path": target},
        )
        return target

    def _read_object(self, key: str) -> bytes:
        response = self._client.get_object(
            bucket_name=self._bucket_name, object_name=key
        )
        try:
            return response.data
        finally:
            response.close()
            response.release_conn()

    def _list_page(self, prefix: str | None, cursor: str | None) -> list[str]:
        """Fetches up to one page of keys strictly after ``cursor``."""
        objects = self._client.list_objects(
            bucket_name=self._bucket_name,
            prefix=prefix,
            recursive=True,
            start_after=cursor,
        )
        return [obj.object_name for obj in islice(objects, self._list_page_size)]

    def _download_to_path(self, key: str, destination: str) -> str:
        target = self._resolve_target(key, destination)

        try:
            os.makedirs(os.path.dirname(target), exist_ok=True)
        except OSError as e:
            logger.exception(
                "Could not create download directory",
                extra={"object": key, "path": target},
            )
            raise InvalidDestinationError(target, str(e)) from e

        self._stream_to_file(key, target)
        return target

    def _resolve_target(self, key: str, destination: str) -> str:
        """Maps an object key onto a file path inside ``destination``."""
        if not os.path.isdir(destination):
            reason = "not an existing directory"
        elif not key or key.endswith("/") or os.path.isabs(key):
            reason = "key does not name a file"
        else:
            root = os.path.realpath(destination)
            target = os.path.realpath(os.path.join(root, key))
            if os.path.commonpath([root, target]) != root or target == root:
                reason = "key escapes the destination"
            else:
                return target

        logger.error(
            "Invalid download destination",
            extra={"object": key, "path": destination, "reason": reason},
        )
        raise InvalidDestinationError(destination, reason)

    def _stream_to_file(self, key: str, target: str) -> None:
        try:
            response = self._client.get_object(
                bucket_name=self._bucket_name, object_name=key
            )
        except Exception as e:
            logger.exception(
                "Download failed",
                extra={"bucket": self._bucket_name, "object": key},
            )
            raise ObjectOperationError("download", key, e) from e

        try:
            with open(target, "wb") as f:
                for chunk in response.stream(self._chunk_size):
                    f.write(chunk)
                f.flush()
        except OSError as e:
            logger.exception(
                "Writing download failed", extra={"object": key, "path": target}
            )
            raise DownloadWriteError(target, e) from e
        except Exception as e:
            logger.exception(
                "Download stream failed",
                extra={"bucket": self._bucket_name, "object": key},
            )
            raise ObjectOperationError("download", key, e) from e
        finally:
            response.close()
            response.release_conn()
