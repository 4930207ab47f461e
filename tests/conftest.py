import logging

import pytest
from urllib3.exceptions import ProtocolError

from r2_storage import R2ClientBuilder, R2StorageClient


class FakeS3Error(Exception):
    """Stands in for minio's S3Error; carries the S3 error code."""

    def __init__(self, code: str, resource: str = "") -> None:
        self.code = code
        super().__init__(f"{code}: {resource}")


class FakeObject:
    def __init__(self, object_name: str) -> None:
        self.object_name = object_name


class FakeResponse:
    """Mimics the urllib3 response returned by Minio.get_object."""

    def __init__(self, data: bytes, fail_after_chunks: int | None = None) -> None:
        self._data = data
        self._fail_after_chunks = fail_after_chunks
        self.closed = False
        self.released = False
        self.stream_chunk_sizes: list[int] = []

    @property
    def data(self) -> bytes:
        return self._data

    def stream(self, amt: int):
        for index, start in enumerate(range(0, len(self._data), amt)):
            if self._fail_after_chunks is not None and index >= self._fail_after_chunks:
                raise ProtocolError("Connection broken: IncompleteRead")
            chunk = self._data[start:start + amt]
            self.stream_chunk_sizes.append(len(chunk))
            yield chunk

    def close(self) -> None:
        self.closed = True

    def release_conn(self) -> None:
        self.released = True


class FakeMinio:
    """In-memory Minio double that records calls and can inject failures."""

    def __init__(self) -> None:
        self.buckets: dict[str, dict[str, bytes]] = {}
        self.content_types: dict[tuple[str, str], str] = {}
        self.list_calls: list[dict] = []
        self.responses: list[FakeResponse] = []
        self.failures: dict[str, Exception] = {}
        self.fail_list_on_call: int | None = None
        self.fail_stream_after_chunks: int | None = None

    def _check_failure(self, method: str) -> None:
        if method in self.failures:
            raise self.failures[method]

    def _bucket(self, bucket_name: str) -> dict[str, bytes]:
        if bucket_name not in self.buckets:
            raise FakeS3Error("NoSuchBucket", bucket_name)
        return self.buckets[bucket_name]

    def make_bucket(self, bucket_name: str, location: str | None = None) -> None:
        self._check_failure("make_bucket")
        if bucket_name in self.buckets:
            raise FakeS3Error("BucketAlreadyOwnedByYou", bucket_name)
        self.buckets[bucket_name] = {}

    def remove_bucket(self, bucket_name: str) -> None:
        self._check_failure("remove_bucket")
        if self._bucket(bucket_name):
            raise FakeS3Error("BucketNotEmpty", bucket_name)
        del self.buckets[bucket_name]

    def bucket_exists(self, bucket_name: str) -> bool:
        self._check_failure("bucket_exists")
        return bucket_name in self.buckets

    def put_object(
        self,
        bucket_name: str,
        object_name: str,
        data,
        length: int,
        content_type: str = "application/octet-stream",
    ) -> None:
        self._check_failure("put_object")
        body = data.read(length)
        self._bucket(bucket_name)[object_name] = body
        self.content_types[(bucket_name, object_name)] = content_type

    def get_object(self, bucket_name: str, object_name: str) -> FakeResponse:
        self._check_failure("get_object")
        bucket = self._bucket(bucket_name)
        if object_name not in bucket:
            raise FakeS3Error("NoSuchKey", object_name)
        response = FakeResponse(bucket[object_name], self.fail_stream_after_chunks)
        self.responses.append(response)
        return response

    def remove_object(self, bucket_name: str, object_name: str) -> None:
        self._check_failure("remove_object")
        self._bucket(bucket_name).pop(object_name, None)

    def list_objects(
        self,
        bucket_name: str,
        prefix: str | None = None,
        recursive: bool = False,
        start_after: str | None = None,
    ):
        self.list_calls.append({"prefix": prefix, "start_after": start_after})
        if self.fail_list_on_call == len(self.list_calls):
            raise FakeS3Error("InternalError", bucket_name)
        keys = sorted(self._bucket(bucket_name))
        for key in keys:
            if prefix and not key.startswith(prefix):
                continue
            if start_after is not None and key <= start_after:
                continue
            yield FakeObject(key)


@pytest.fixture
def bucket_name() -> str:
    return "test-bucket"


@pytest.fixture
def fake_minio(bucket_name: str) -> FakeMinio:
    client = FakeMinio()
    client.buckets[bucket_name] = {}
    return client


@pytest.fixture
def storage(fake_minio: FakeMinio, bucket_name: str) -> R2StorageClient:
    return R2StorageClient(fake_minio, bucket_name)


@pytest.fixture
def full_builder() -> R2ClientBuilder:
    return (
        R2ClientBuilder()
        .bucket_name("test-bucket")
        .url("https://account.r2.cloudflarestorage.com")
        .client_id("client-id")
        .secret_key("super-secret")
    )


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)
