"""In-memory backend, usable in place of either the local or the S3 backend."""

import asyncio
import os
from typing import AsyncIterator, Dict, Tuple

from common.exceptions import UnsupportedOperationError
from common.optional import Option
from common.paths import normalize_location, to_s3_location_string
from common.scanner import compute_content_info, guess_mime_type
from common.types import CopyOperation, FileLocation, S3File, ScannedFile, WriteRequest
from fileservice import config
from fileservice.options import CopyOptions, DeleteOptions, WriteOptions


class MemoryBackend:
    """
    Backend keeping file bodies in a dict keyed by location string.

    Local locations match folders on path boundaries; S3 locations match
    on raw key prefixes, as the object store does.
    """

    def __init__(self, poll_interval: float = config.POLL_INTERVAL_SECONDS):
        self.poll_interval = poll_interval
        self.store: Dict[str, Tuple[FileLocation, bytes]] = {}

    def normalize(self, location):
        return normalize_location(location)

    def to_location_string(self, location: FileLocation) -> str:
        file = self.normalize(location)
        if isinstance(file, S3File):
            return to_s3_location_string(file)
        return file.key

    def _scanned(self, location: FileLocation, body: bytes) -> ScannedFile:
        info = compute_content_info(body)
        return ScannedFile(
            location=location,
            content_hash=info.content_hash,
            size=info.size,
            mime_type=guess_mime_type(location.key),
        )

    def _is_under(self, candidate: str, folder: FileLocation) -> bool:
        prefix = self.to_location_string(folder)
        if isinstance(folder, S3File):
            return candidate.startswith(prefix)
        return candidate == prefix or candidate.startswith(prefix.rstrip(os.sep) + os.sep)

    async def scan(self, location: FileLocation) -> Option[ScannedFile]:
        await asyncio.sleep(0)
        entry = self.store.get(self.to_location_string(location))
        if entry is None:
            return Option.empty()
        return Option.of(self._scanned(*entry))

    async def list(self, location: FileLocation) -> AsyncIterator[ScannedFile]:
        folder = self.normalize(location)
        keys = sorted(k for k in self.store if self._is_under(k, folder))
        for key in keys:
            await asyncio.sleep(0)
            entry = self.store.get(key)
            if entry is not None:
                yield self._scanned(*entry)

    async def read_file(self, file: ScannedFile) -> bytes:
        await asyncio.sleep(0)
        return self.store[self.to_location_string(file.location)][1]

    async def write_file(self, request: WriteRequest, options: WriteOptions) -> None:
        await asyncio.sleep(0)
        destination = self.normalize(request.destination)
        self.store[self.to_location_string(destination)] = (destination, request.data)

    async def delete_file(self, file: ScannedFile, options: DeleteOptions) -> None:
        await asyncio.sleep(0)
        del self.store[self.to_location_string(file.location)]

    async def copy_file(self, operation: CopyOperation, options: CopyOptions) -> None:
        await asyncio.sleep(0)
        destination = self.normalize(operation.destination)
        body = self.store[self.to_location_string(operation.source.location)][1]
        self.store[self.to_location_string(destination)] = (destination, body)

    async def wait_for_file_to_exist(self, location: FileLocation) -> None:
        key = self.to_location_string(location)
        while key not in self.store:
            await asyncio.sleep(self.poll_interval)

    async def get_read_url(self, file: ScannedFile, expires: int) -> str:
        raise UnsupportedOperationError("Read URLs are not supported for in-memory files")
