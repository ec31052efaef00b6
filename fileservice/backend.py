"""Backend Port: the capability set every storage backend implements."""

from typing import AsyncIterator, Protocol, TypeVar, runtime_checkable

from common.optional import Option
from common.types import CopyOperation, FileLocation, ScannedFile, WriteRequest
from fileservice.options import CopyOptions, DeleteOptions, WriteOptions

L = TypeVar("L")


@runtime_checkable
class Backend(Protocol):
    """
    Storage backend contract.

    Every method normalizes its own location arguments. Every I/O call is
    awaited so the engine can interleave in-flight requests.
    """

    def normalize(self, location: L) -> L:
        """Return location with its key in the backend's canonical form."""
        ...

    def to_location_string(self, location: FileLocation) -> str:
        """Canonical identity of a location, used for equality and logging."""
        ...

    async def scan(self, location: FileLocation) -> Option[ScannedFile]:
        """Fingerprint a file. Empty only when the file is confirmed missing."""
        ...

    def list(self, location: FileLocation) -> AsyncIterator[ScannedFile]:
        """Lazily yield every file at or under location."""
        ...

    async def read_file(self, file: ScannedFile) -> bytes:
        """Read the full body of an existing file."""
        ...

    async def write_file(self, request: WriteRequest, options: WriteOptions) -> None:
        """Persist a body, creating any missing parent structure."""
        ...

    async def delete_file(self, file: ScannedFile, options: DeleteOptions) -> None:
        """Delete an existing file."""
        ...

    async def copy_file(self, operation: CopyOperation, options: CopyOptions) -> None:
        """Copy within this backend using its native copy primitive."""
        ...

    async def wait_for_file_to_exist(self, location: FileLocation) -> None:
        """Suspend until the file exists."""
        ...

    async def get_read_url(self, file: ScannedFile, expires: int) -> str:
        """Return a URL a client can use to download the file."""
        ...
