"""Configuration settings for the file service, read from the environment."""

import os
from common.constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_LINK_EXPIRY_SECONDS,
    DEFAULT_LIST_PAGE_SIZE,
    DEFAULT_POLL_INTERVAL_SECONDS,
)


CONCURRENCY = int(os.environ.get("FS_DEFAULT_CONCURRENCY", str(DEFAULT_CONCURRENCY)))

LIST_PAGE_SIZE = int(os.environ.get("FS_LIST_PAGE_SIZE", str(DEFAULT_LIST_PAGE_SIZE)))

POLL_INTERVAL_SECONDS = float(os.environ.get("FS_POLL_INTERVAL_SECONDS", str(DEFAULT_POLL_INTERVAL_SECONDS)))

LINK_EXPIRY_SECONDS = int(os.environ.get("FS_LINK_EXPIRY_SECONDS", str(DEFAULT_LINK_EXPIRY_SECONDS)))

S3_ENDPOINT_URL = os.environ.get("FS_S3_ENDPOINT_URL") or None

S3_REGION = os.environ.get("FS_S3_REGION") or os.environ.get("AWS_REGION") or None

S3_PROFILE = os.environ.get("FS_S3_PROFILE") or None
