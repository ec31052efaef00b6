"""S3-compatible object store backend built on a boto3 client."""

import io
import logging
from dataclasses import replace
from typing import Any, AsyncIterator, Callable, Dict

from botocore.exceptions import BotoCoreError, ClientError

from common.constants import DEFAULT_CONTENT_TYPE
from common.exceptions import BackendUnavailableError
from common.optional import Option
from common.paths import normalize_s3_key, to_s3_location_string
from common.scanner import guess_mime_type
from common.types import CopyOperation, S3File, ScannedFile, WriteRequest
from fileservice import config
from fileservice.options import CopyOptions, DeleteOptions, S3WriteOptions, WriteOptions
from fileservice.utils import run_blocking

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = ("404", "NoSuchKey", "NotFound")


def is_not_found(error: ClientError) -> bool:
    """Check whether a botocore ClientError means the object does not exist."""
    return error.response.get("Error", {}).get("Code") in NOT_FOUND_CODES


def parse_etag(etag: str) -> str:
    """Strip the quotes S3 wraps around ETag values."""
    return etag.strip('"')


class S3Backend:
    """
    Backend over an S3-compatible object store.

    Args:
        client: boto3 S3 client
        page_size: MaxKeys for each list_objects_v2 page
    """

    def __init__(self, client, page_size: int = config.LIST_PAGE_SIZE):
        self._client = client
        self.page_size = page_size

    async def _call(self, func: Callable[..., Any], *args: Any, missing_ok: bool = False, **kwargs: Any) -> Any:
        """
        Run a blocking boto3 call and translate its failures.

        Args:
            func: Bound client method or helper
            missing_ok: Return None instead of raising when the object does not exist

        Raises:
            FileNotFoundError: If the object does not exist and missing_ok is False
            BackendUnavailableError: On any other client, transport or credential failure
        """
        try:
            return await run_blocking(func, *args, **kwargs)
        except ClientError as e:
            if is_not_found(e):
                if missing_ok:
                    return None
                raise FileNotFoundError(f"S3 object not found: {kwargs.get('Key', args)}") from e
            raise BackendUnavailableError(f"S3 request failed: {e}") from e
        except BotoCoreError as e:
            raise BackendUnavailableError(f"S3 backend unavailable: {e}") from e

    def normalize(self, location: S3File) -> S3File:
        return replace(location, key=normalize_s3_key(location.key))

    def to_location_string(self, location: S3File) -> str:
        return to_s3_location_string(self.normalize(location))

    async def scan(self, location: S3File) -> Option[ScannedFile]:
        file = self.normalize(location)
        response = await self._call(self._client.head_object, Bucket=file.bucket, Key=file.key, missing_ok=True)
        if response is None:
            return Option.empty()
        return Option.of(ScannedFile(
            location=file,
            content_hash=parse_etag(response["ETag"]),
            size=response["ContentLength"],
            mime_type=response.get("ContentType"),
        ))

    async def list(self, location: S3File) -> AsyncIterator[ScannedFile]:
        """
        Yield every object under the location's key prefix.

        Pages come from the list_objects_v2 paginator one at a time; each
        page is yielded in full before the next request is made. Folder
        marker keys ending in '/' are skipped.
        """
        folder = self.normalize(location)
        paginator = self._client.get_paginator("list_objects_v2")
        pages = iter(paginator.paginate(
            Bucket=folder.bucket,
            Prefix=folder.key,
            PaginationConfig={"PageSize": self.page_size},
        ))
        while True:
            page = await self._call(next, pages, None)
            if page is None:
                break
            for item in page.get("Contents", []):
                if item["Key"].endswith("/"):
                    continue
                yield ScannedFile(
                    location=S3File(bucket=folder.bucket, key=item["Key"]),
                    content_hash=parse_etag(item["ETag"]),
                    size=item["Size"],
                    mime_type=guess_mime_type(item["Key"]),
                )

    def _get_body(self, bucket: str, key: str) -> bytes:
        response = self._client.get_object(Bucket=bucket, Key=key)
        return response["Body"].read()

    async def read_file(self, file: ScannedFile) -> bytes:
        location = self.normalize(file.location)
        return await self._call(self._get_body, location.bucket, location.key)

    def _write_params(self, options: S3WriteOptions) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if options.make_public:
            params["ACL"] = "public-read"
        params.update(options.extra_args)
        return params

    async def write_file(self, request: WriteRequest, options: WriteOptions) -> None:
        destination = self.normalize(request.destination)
        extra_args = {"ContentType": guess_mime_type(destination.key) or DEFAULT_CONTENT_TYPE}
        extra_args.update(self._write_params(options))
        await self._call(
            self._client.upload_fileobj,
            io.BytesIO(request.data),
            destination.bucket,
            destination.key,
            ExtraArgs=extra_args,
            Callback=options.progress_listener,
        )
        logger.debug(f"Uploaded {len(request.data)} bytes to {to_s3_location_string(destination)}")

    async def copy_file(self, operation: CopyOperation, options: CopyOptions) -> None:
        source = self.normalize(operation.source.location)
        destination = self.normalize(operation.destination)
        await self._call(
            self._client.copy_object,
            Bucket=destination.bucket,
            Key=destination.key,
            CopySource={"Bucket": source.bucket, "Key": source.key},
            **self._write_params(options),
        )

    async def delete_file(self, file: ScannedFile, options: DeleteOptions) -> None:
        location = self.normalize(file.location)
        await self._call(self._client.delete_object, Bucket=location.bucket, Key=location.key)

    async def wait_for_file_to_exist(self, location: S3File) -> None:
        file = self.normalize(location)
        waiter = self._client.get_waiter("object_exists")
        await self._call(waiter.wait, Bucket=file.bucket, Key=file.key)

    async def get_read_url(self, file: ScannedFile, expires: int) -> str:
        location = self.normalize(file.location)
        return await self._call(
            self._client.generate_presigned_url,
            "get_object",
            Params={"Bucket": location.bucket, "Key": location.key},
            ExpiresIn=expires,
        )
