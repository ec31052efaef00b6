"""Construction of the standard local + S3 file service."""

import logging
from typing import Optional

import boto3

from fileservice import config
from fileservice.dispatcher import PolyBackend
from fileservice.engine import FileService
from fileservice.local_backend import LocalBackend
from fileservice.s3_backend import S3Backend

logger = logging.getLogger(__name__)


def create_s3_client(
    profile_name: Optional[str] = None,
    region: Optional[str] = None,
    endpoint_url: Optional[str] = None,
):
    """
    Create a boto3 S3 client.

    Args:
        profile_name: AWS CLI profile name (defaults to FS_S3_PROFILE)
        region: AWS region (defaults to FS_S3_REGION / AWS_REGION)
        endpoint_url: Custom endpoint for S3-compatible stores (defaults to FS_S3_ENDPOINT_URL)

    Returns:
        boto3 S3 client
    """
    session = boto3.session.Session(
        profile_name=profile_name or config.S3_PROFILE,
        region_name=region or config.S3_REGION,
    )
    endpoint_url = endpoint_url or config.S3_ENDPOINT_URL
    if endpoint_url:
        logger.info(f"Using S3 endpoint {endpoint_url}")
    return session.client("s3", endpoint_url=endpoint_url)


def create_file_service(
    s3_client=None,
    page_size: int = config.LIST_PAGE_SIZE,
    poll_interval: float = config.POLL_INTERVAL_SECONDS,
    link_expiry: int = config.LINK_EXPIRY_SECONDS,
) -> FileService:
    """
    Build a FileService that handles both local paths and S3 locations.

    Args:
        s3_client: boto3 S3 client; created from configuration when omitted
        page_size: Keys per S3 list page
        poll_interval: Seconds between local existence polls
        link_expiry: Default read URL lifetime in seconds

    Returns:
        FileService over a PolyBackend
    """
    if s3_client is None:
        s3_client = create_s3_client()
    backend = PolyBackend(
        local=LocalBackend(poll_interval=poll_interval),
        s3=S3Backend(s3_client, page_size=page_size),
    )
    return FileService(backend, link_expiry=link_expiry)
