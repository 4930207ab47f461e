"""Custom exceptions for the R2 storage client."""


class R2StorageError(Exception):
    """Base class for every error raised by the R2 storage client."""


class MissingFieldError(R2StorageError):
    """Raised when a client is built without all required configuration."""

    def __init__(self, field: str, fields: list[str] | None = None):
        self.field = field
        self.fields = fields or [field]
        super().__init__(
            f"Missing required configuration field '{field}'"
            f" (missing: {', '.join(self.fields)})"
        )


class InvalidConfigError(R2StorageError):
    """Raised when a configuration value is present but unusable."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid configuration field '{field}': {reason}")


class BucketOperationError(R2StorageError):
    """Raised when a bucket create/delete/exists request fails."""

    def __init__(
        self, operation: str, bucket_name: str, cause: Exception | None = None
    ):
        self.operation = operation
        self.bucket_name = bucket_name
        self.cause = cause
        super().__init__(f"Failed to {operation} bucket '{bucket_name}'")


class ObjectOperationError(R2StorageError):
    """Raised when an object request fails, including not-found and denied."""

    def __init__(self, operation: str, key: str, cause: Exception | None = None):
        self.operation = operation
        self.key = key
        self.cause = cause
        # S3 error code such as "NoSuchKey", when the SDK reported one
        self.code = getattr(cause, "code", None)
        super().__init__(f"Failed to {operation} object '{key}'")


class InvalidDestinationError(R2StorageError):
    """Raised when a download target is not a usable directory or path."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid download destination '{path}': {reason}")


class DownloadWriteError(R2StorageError):
    """Raised when writing a downloaded object to local disk fails."""

    def __init__(self, path: str, cause: Exception | None = None):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write download to '{path}'")
