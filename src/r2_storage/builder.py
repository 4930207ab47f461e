"""Step-by-step construction of an R2StorageClient."""

from pydantic import BaseModel, Field

from r2_storage.config import R2Config, missing_fields
from r2_storage.exceptions import MissingFieldError
from r2_storage.infrastructure.r2_storage import R2StorageClient


class R2ClientBuilder(BaseModel, frozen=True):
    """
    Accumulates the four required connection fields in any order.

    Every setter returns a new builder, so a partially configured builder can
    be shared and extended safely. Setting a field twice keeps the last value.
    ``build`` makes no network calls.
    """

    bucket_name_value: str | None = None
    url_value: str | None = None
    client_id_value: str | None = None
    secret_key_value: str | None = Field(default=None, repr=False)

    def bucket_name(self, bucket_name: str) -> "R2ClientBuilder":
        return self.model_copy(update={"bucket_name_value": bucket_name})

    def url(self, url: str) -> "R2ClientBuilder":
        return self.model_copy(update={"url_value": url})

    def client_id(self, client_id: str) -> "R2ClientBuilder":
        return self.model_copy(update={"client_id_value": client_id})

    def secret_key(self, secret_key: str) -> "R2ClientBuilder":
        return self.model_copy(update={"secret_key_value": secret_key})

    def to_config(self) -> R2Config:
        """
        Validates completeness and returns the accumulated configuration.

        Raises:
            MissingFieldError: Naming the first unset field, with every unset
                field listed in ``fields``.
        """
        values = {
            "bucket_name": self.bucket_name_value,
            "url": self.url_value,
            "client_id": self.client_id_value,
            "secret_key": self.secret_key_value,
        }
        missing = missing_fields(values)
        if missing:
            raise MissingFieldError(missing[0], missing)
        return R2Config(**values)

    def build(self) -> R2StorageClient:
        """
        Builds a client wired to the configured endpoint and credentials.

        Raises:
            MissingFieldError: If any required field is unset.
            InvalidConfigError: If the endpoint URL is unusable.
        """
        return R2StorageClient.from_config(self.to_config())
