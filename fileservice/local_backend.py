"""Local filesystem backend."""

import asyncio
import logging
import os
import shutil
import stat
from dataclasses import replace
from typing import AsyncIterator, Optional, Set, Tuple

from common.exceptions import UnsupportedOperationError
from common.optional import Option
from common.paths import normalize_local_path
from common.scanner import compute_stream_content_info, guess_mime_type
from common.types import ContentInfo, CopyOperation, LocalFile, ScannedFile, WriteRequest
from fileservice import config
from fileservice.options import CopyOptions, DeleteOptions, WriteOptions
from fileservice.utils import run_blocking

logger = logging.getLogger(__name__)


def _stat(path: str) -> Optional[os.stat_result]:
    try:
        return os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return None


def _fingerprint(path: str) -> Optional[ContentInfo]:
    stat_result = _stat(path)
    if stat_result is None or not stat.S_ISREG(stat_result.st_mode):
        return None
    try:
        with open(path, "rb") as f:
            return compute_stream_content_info(f)
    except FileNotFoundError:
        return None


def _list_directory(path: str) -> list[str]:
    try:
        return os.listdir(path)
    except (FileNotFoundError, NotADirectoryError):
        return []


def _ensure_parent_directory(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def _read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def _write_bytes(path: str, data: bytes) -> None:
    _ensure_parent_directory(path)
    with open(path, "wb") as f:
        f.write(data)


def _copy(source: str, destination: str) -> None:
    _ensure_parent_directory(destination)
    shutil.copyfile(source, destination)


class LocalBackend:
    """
    Backend over the local filesystem.

    Files are fingerprinted by streaming them through MD5 on every scan.
    """

    def __init__(self, poll_interval: float = config.POLL_INTERVAL_SECONDS):
        self.poll_interval = poll_interval

    def normalize(self, location: LocalFile) -> LocalFile:
        return replace(location, key=normalize_local_path(location.key))

    def to_location_string(self, location: LocalFile) -> str:
        return normalize_local_path(location.key)

    async def scan(self, location: LocalFile) -> Option[ScannedFile]:
        file = self.normalize(location)
        info = await run_blocking(_fingerprint, file.key)
        if info is None:
            return Option.empty()
        return Option.of(ScannedFile(
            location=file,
            content_hash=info.content_hash,
            size=info.size,
            mime_type=guess_mime_type(file.key),
        ))

    async def list(self, location: LocalFile) -> AsyncIterator[ScannedFile]:
        """
        Depth-first walk yielding files as they are found.

        Only one directory is read at a time; subdirectories are entered
        as they are encountered. Symlinked directories are followed, but a
        directory already visited in this walk is not entered again.
        """
        root = self.normalize(location)
        async for scanned in self._walk(root.key, set()):
            yield scanned

    async def _walk(self, path: str, visited: Set[Tuple[int, int]]) -> AsyncIterator[ScannedFile]:
        stat_result = await run_blocking(_stat, path)
        if stat_result is None:
            return
        if stat.S_ISREG(stat_result.st_mode):
            scanned = await self.scan(LocalFile(key=path))
            if scanned.exists:
                yield scanned.value
        elif stat.S_ISDIR(stat_result.st_mode):
            identity = (stat_result.st_dev, stat_result.st_ino)
            if identity in visited:
                logger.debug(f"Skipping already visited directory {path}")
                return
            visited.add(identity)
            for name in await run_blocking(_list_directory, path):
                async for scanned in self._walk(os.path.join(path, name), visited):
                    yield scanned

    async def read_file(self, file: ScannedFile) -> bytes:
        location = self.normalize(file.location)
        return await run_blocking(_read_bytes, location.key)

    async def write_file(self, request: WriteRequest, options: WriteOptions) -> None:
        destination = self.normalize(request.destination)
        await run_blocking(_write_bytes, destination.key, request.data)
        logger.debug(f"Wrote {len(request.data)} bytes to {destination.key}")

    async def delete_file(self, file: ScannedFile, options: DeleteOptions) -> None:
        location = self.normalize(file.location)
        await run_blocking(os.unlink, location.key)

    async def copy_file(self, operation: CopyOperation, options: CopyOptions) -> None:
        source = self.normalize(operation.source.location)
        destination = self.normalize(operation.destination)
        await run_blocking(_copy, source.key, destination.key)

    async def wait_for_file_to_exist(self, location: LocalFile) -> None:
        file = self.normalize(location)
        while not await run_blocking(os.path.exists, file.key):
            await asyncio.sleep(self.poll_interval)

    async def get_read_url(self, file: ScannedFile, expires: int) -> str:
        raise UnsupportedOperationError("Read URLs are not supported for local files")
