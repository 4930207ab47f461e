import mimetypes

DEFAULT_REGION = "us-east-1"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
LIST_PAGE_SIZE = 1000
DOWNLOAD_CHUNK_SIZE = 64 * 1024


def guess_content_type(key: str) -> str:
    """Best-effort MIME type from the key's file extension."""
    content_type, _ = mimetypes.guess_type(key, strict=False)
    return content_type or DEFAULT_CONTENT_TYPE
