"""Dispatcher routing each location to the backend that owns it."""

import logging
from typing import AsyncIterator

from common.optional import Option
from common.types import CopyOperation, FileLocation, S3File, ScannedFile, WriteRequest
from fileservice.backend import Backend
from fileservice.options import CopyOptions, DeleteOptions, WriteOptions

logger = logging.getLogger(__name__)


class PolyBackend:
    """
    Backend that delegates to a local or an S3 backend by location type.

    Copies between different backends stream the body through this
    process: read from the source backend, write to the destination one.
    """

    def __init__(self, local: Backend, s3: Backend):
        self.local = local
        self.s3 = s3

    def resolve(self, location: FileLocation) -> Backend:
        if isinstance(location, ScannedFile):
            location = location.location
        if isinstance(location, S3File):
            return self.s3
        return self.local

    def normalize(self, location):
        return self.resolve(location).normalize(location)

    def to_location_string(self, location: FileLocation) -> str:
        return self.resolve(location).to_location_string(location)

    async def scan(self, location: FileLocation) -> Option[ScannedFile]:
        return await self.resolve(location).scan(location)

    def list(self, location: FileLocation) -> AsyncIterator[ScannedFile]:
        return self.resolve(location).list(location)

    async def read_file(self, file: ScannedFile) -> bytes:
        return await self.resolve(file).read_file(file)

    async def write_file(self, request: WriteRequest, options: WriteOptions) -> None:
        await self.resolve(request.destination).write_file(request, options)

    async def delete_file(self, file: ScannedFile, options: DeleteOptions) -> None:
        await self.resolve(file).delete_file(file, options)

    async def copy_file(self, operation: CopyOperation, options: CopyOptions) -> None:
        source_backend = self.resolve(operation.source)
        destination_backend = self.resolve(operation.destination)
        if source_backend is destination_backend:
            await source_backend.copy_file(operation, options)
            return

        logger.debug(
            f"Cross-backend copy {self.to_location_string(operation.source.location)} -> "
            f"{self.to_location_string(operation.destination)}"
        )
        body = await source_backend.read_file(operation.source)
        await destination_backend.write_file(
            WriteRequest(destination=operation.destination, body=body), options
        )

    async def wait_for_file_to_exist(self, location: FileLocation) -> None:
        await self.resolve(location).wait_for_file_to_exist(location)

    async def get_read_url(self, file: ScannedFile, expires: int) -> str:
        return await self.resolve(file).get_read_url(file, expires)
