"""Connection configuration, optionally loaded from environment variables."""

import os

from pydantic import BaseModel, Field

from r2_storage.exceptions import MissingFieldError
from r2_storage.utils import DEFAULT_REGION

REQUIRED_FIELDS = ("bucket_name", "url", "client_id", "secret_key")

ENV_VARS = {
    "bucket_name": "CLOUDFLARE_BUCKET_NAME",
    "url": "CLOUDFLARE_URL",
    "client_id": "CLOUDFLARE_CLIENT_ID",
    "secret_key": "CLOUDFLARE_SECRET_KEY",
}


class R2Config(BaseModel, frozen=True):
    """R2 connection configuration."""

    bucket_name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    client_id: str = Field(min_length=1)
    secret_key: str = Field(min_length=1, repr=False)
    region: str = DEFAULT_REGION


def missing_fields(values: dict[str, str | None]) -> list[str]:
    """Returns the required fields that are unset or blank, in declaration order."""
    return [name for name in REQUIRED_FIELDS if not values.get(name)]


def load_config() -> R2Config:
    """
    Loads configuration from environment variables.

    Raises:
        MissingFieldError: If any of the required variables is unset or empty.
    """
    values = {name: os.getenv(env_var) for name, env_var in ENV_VARS.items()}
    missing = missing_fields(values)
    if missing:
        raise MissingFieldError(ENV_VARS[missing[0]], [ENV_VARS[m] for m in missing])

    return R2Config(
        **values,
        region=os.getenv("R2_REGION", DEFAULT_REGION),
    )
