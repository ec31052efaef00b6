"""Project-wide constants (e.g., default concurrency, page sizes, hashing)."""

DEFAULT_CONCURRENCY: int = 5
DEFAULT_LIST_PAGE_SIZE: int = 1000  # S3 list_objects_v2 maximum
DEFAULT_POLL_INTERVAL_SECONDS: float = 0.1
DEFAULT_LINK_EXPIRY_SECONDS: int = 15 * 60

HASH_CHUNK_SIZE_BYTES: int = 64 * 1024
DEFAULT_CONTENT_TYPE: str = "application/octet-stream"

S3_SCHEME: str = "s3://"
