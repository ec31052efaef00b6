"""
Copy/sync and delete engines plus single-file operations.

Written once over the Backend Port, so the same policy applies to any
backend or to the local/S3 dispatcher.
"""

import asyncio
import logging
from contextlib import aclosing
from dataclasses import replace
from typing import AsyncIterator, Awaitable, Callable, Optional, TypeVar

from common.exceptions import InvariantViolationError
from common.optional import Option
from common.paths import replace_folder_prefix
from common.types import CopyOperation, FileLocation, ScannedFile, WriteRequest
from fileservice import config
from fileservice.backend import Backend
from fileservice.options import CopyOptions, DeleteOptions, WriteOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_comparable_hash(content_hash: Optional[str]) -> bool:
    """
    Check whether a fingerprint is a plain content digest.

    Multipart S3 ETags look like '<hex>-<part count>' and do not hash the
    content itself, so they never compare equal to anything.
    """
    return bool(content_hash) and "-" not in content_hash


def same_content(first: ScannedFile, second: ScannedFile) -> bool:
    if not (is_comparable_hash(first.content_hash) and is_comparable_hash(second.content_hash)):
        return False
    return first.content_hash == second.content_hash


async def process_in_batches(
    items: AsyncIterator[T],
    processor: Callable[[T], Awaitable[None]],
    concurrency: int,
) -> int:
    """
    Consume a lazy sequence in batches of at most concurrency items.

    A batch is started only after the previous batch has fully settled.
    If any item of a batch fails, the rest of that batch still settles,
    then the first error is raised and no further items are pulled.

    Args:
        items: Lazy source sequence
        processor: Coroutine function applied to each item
        concurrency: Maximum number of in-flight items

    Returns:
        Number of items processed
    """
    processed = 0
    batch: list[T] = []

    async def flush() -> None:
        nonlocal processed, batch
        current, batch = batch, []
        results = await asyncio.gather(*(processor(item) for item in current), return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        processed += len(current)

    async with aclosing(items):
        async for item in items:
            batch.append(item)
            if len(batch) >= concurrency:
                await flush()
    if batch:
        await flush()
    return processed


class FileService:
    """
    Unified file operations over a backend.

    Args:
        backend: Any Backend Port implementation, typically a PolyBackend
        link_expiry: Default lifetime in seconds of generated read URLs
    """

    def __init__(self, backend: Backend, link_expiry: int = config.LINK_EXPIRY_SECONDS):
        self.backend = backend
        self.link_expiry = link_expiry

    def to_location_string(self, location: FileLocation) -> str:
        return self.backend.to_location_string(location)

    def same_location(self, first: FileLocation, second: FileLocation) -> bool:
        return self.to_location_string(first) == self.to_location_string(second)

    async def scan(self, location: FileLocation) -> Option[ScannedFile]:
        return await self.backend.scan(self.backend.normalize(location))

    def list(self, location: FileLocation) -> AsyncIterator[ScannedFile]:
        return self.backend.list(self.backend.normalize(location))

    async def copy(
        self,
        source: FileLocation,
        destination: FileLocation,
        options: Optional[CopyOptions] = None,
    ) -> None:
        """
        Copy every file at or under source to the matching path under destination.

        Args:
            source: Source file or folder
            destination: Destination file or folder
            options: Concurrency, overwrite policy and listener

        Raises:
            Whatever the backends raise; already completed copies stay applied
        """
        options = options or CopyOptions()
        source = self.backend.normalize(source)
        destination = self.backend.normalize(destination)
        copied = 0

        async def process(source_file: ScannedFile) -> None:
            nonlocal copied
            operation = CopyOperation(
                source=source_file,
                destination=self.to_destination(source_file, source, destination),
            )
            if not await self.proceed_with_copy(operation, options):
                logger.debug(f"Skipping {self.to_location_string(operation.destination)}")
                return
            await self.copy_file(operation, options)
            copied += 1
            if options.listener:
                options.listener(operation)

        listed = await process_in_batches(self.list(source), process, options.concurrency)
        logger.info(
            f"Copied {copied} of {listed} file(s) from {self.to_location_string(source)} "
            f"to {self.to_location_string(destination)}"
        )

    def to_destination(
        self,
        source_file: ScannedFile,
        source_folder: FileLocation,
        destination_folder: FileLocation,
    ) -> FileLocation:
        key = replace_folder_prefix(source_file.key, source_folder.key, destination_folder.key)
        return self.backend.normalize(replace(destination_folder, key=key))

    async def proceed_with_copy(self, operation: CopyOperation, options: CopyOptions) -> bool:
        """
        Decide whether an operation should run.

        1. Never copy a file onto itself.
        2. Always copy when overwriting without skip_same, without scanning.
        3. Otherwise copy to a missing destination, or over an existing one
           when overwrite is set and the content differs (or skip_same is off).
        """
        if self.same_location(operation.source.location, operation.destination):
            return False

        if options.always_overwrite:
            return True

        scanned_destination = await self.backend.scan(operation.destination)
        if not scanned_destination.exists:
            return True
        return self.overwrite_destination(operation.source, scanned_destination.value, options)

    def overwrite_destination(self, source: ScannedFile, destination: ScannedFile, options: CopyOptions) -> bool:
        if not options.overwrite:
            return False
        return not (options.skip_same and same_content(source, destination))

    async def copy_file(self, operation: CopyOperation, options: CopyOptions) -> None:
        """
        Copy a single file through the backend.

        Raises:
            InvariantViolationError: If source and destination are the same location
        """
        if self.same_location(operation.source.location, operation.destination):
            raise InvariantViolationError(
                f"Refusing to copy {self.to_location_string(operation.destination)} onto itself"
            )
        await self.backend.copy_file(operation, options)

    async def delete(self, file_or_folder: FileLocation, options: Optional[DeleteOptions] = None) -> None:
        """
        Delete every file at or under a location.

        Args:
            file_or_folder: File or folder to delete
            options: Concurrency and listener
        """
        options = options or DeleteOptions()
        target = self.backend.normalize(file_or_folder)

        async def process(file: ScannedFile) -> None:
            await self.backend.delete_file(file, options)
            if options.listener:
                options.listener(file)

        deleted = await process_in_batches(self.list(target), process, options.concurrency)
        logger.info(f"Deleted {deleted} file(s) under {self.to_location_string(target)}")

    async def write(self, request: WriteRequest, options: Optional[WriteOptions] = None) -> Option[ScannedFile]:
        """
        Write a body to a destination.

        Without overwrite an existing destination is returned untouched.

        Args:
            request: Destination and body
            options: Overwrite flag and S3 write extras

        Returns:
            Scan of the destination after the call; may be empty if the
            file vanished concurrently
        """
        options = options or WriteOptions()
        request = replace(request, destination=self.backend.normalize(request.destination))
        if not options.overwrite:
            existing = await self.backend.scan(request.destination)
            if existing.exists:
                logger.debug(f"Not overwriting {self.to_location_string(request.destination)}")
                return existing
        await self.backend.write_file(request, options)
        return await self.backend.scan(request.destination)

    async def read(self, location: FileLocation) -> Option[bytes]:
        scanned = await self.scan(location)
        if not scanned.exists:
            return Option.empty()
        return Option.of(await self.backend.read_file(scanned.value))

    async def read_text(self, location: FileLocation, encoding: str = "utf-8") -> Option[str]:
        content = await self.read(location)
        return content.map(lambda body: body.decode(encoding))

    async def wait_for_file(self, location: FileLocation) -> Option[ScannedFile]:
        file = self.backend.normalize(location)
        await self.backend.wait_for_file_to_exist(file)
        return await self.backend.scan(file)

    async def get_read_url(self, location: FileLocation, expires: Optional[int] = None) -> Option[str]:
        """
        Get a temporary download URL for a file.

        Returns:
            The URL, or empty if the file does not exist

        Raises:
            UnsupportedOperationError: If the backend cannot issue URLs
        """
        scanned = await self.scan(location)
        if not scanned.exists:
            return Option.empty()
        return Option.of(await self.backend.get_read_url(scanned.value, expires or self.link_expiry))
