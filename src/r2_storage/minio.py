import logging
from urllib.parse import urlsplit

from minio import Minio

from r2_storage.exceptions import InvalidConfigError

logger = logging.getLogger(__name__)


def parse_endpoint(url: str) -> tuple[str, bool]:
    """
    Splits an endpoint URL into the host[:port] form MinIO expects.

    Args:
        url: Endpoint URL, e.g. ``https://<account>.r2.cloudflarestorage.com``.
            A bare ``host[:port]`` is accepted and treated as HTTPS.

    Returns:
        Tuple of (endpoint, secure).

    Raises:
        InvalidConfigError: If the URL has no host, an unsupported scheme,
            or a path component.
    """
    parts = urlsplit(url if "://" in url else f"https://{url}")

    if parts.scheme not in ("http", "https"):
        raise InvalidConfigError("url", f"unsupported scheme '{parts.scheme}'")
    if not parts.netloc:
        raise InvalidConfigError("url", "no host in endpoint URL")
    if parts.path not in ("", "/") or parts.query or parts.fragment:
        raise InvalidConfigError("url", "endpoint URL must not contain a path")

    return parts.netloc, parts.scheme == "https"


def get_minio_client(url, access_key, secret_key, region):
    """
    Initialize and return a MinIO client for an S3-compatible endpoint.

    Credentials go straight into the client; the process environment is
    never touched.

    Returns:
        Minio: Configured MinIO client
    """
    endpoint, secure = parse_endpoint(url)
    try:
        client = Minio(
            endpoint=endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
            region=region,
        )
        return client
    except Exception as e:
        logger.exception(
            "MinIO Client Initialization Failed",
            extra={"endpoint": endpoint, "reason": str(e)},
        )
        raise InvalidConfigError("url", str(e)) from e
