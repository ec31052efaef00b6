"""Command handler functions for CLI operations."""

import asyncio
from typing import Optional

from common.logging_config import get_logger
from common.paths import parse_location
from common.types import CopyOperation, ScannedFile, WriteRequest
from cli.config import Config, default_config_path
from cli.models import (
    CopyCommand,
    DeleteCommand,
    ListCommand,
    ReadCommand,
    UrlCommand,
    WaitCommand,
    WriteCommand,
)
from fileservice import config as service_config
from fileservice.engine import FileService
from fileservice.factory import create_file_service, create_s3_client
from fileservice.options import CopyOptions, DeleteOptions, WriteOptions

logger = get_logger(__name__)


_service: Optional[FileService] = None
_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get or create global Config instance.

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        _config = Config(default_config_path())
    return _config


def get_service() -> FileService:
    """
    Get or create global FileService instance.

    Returns:
        FileService instance
    """
    global _service
    if _service is None:
        logger.debug("Creating new FileService instance")
        settings = get_config().get_settings()
        client = create_s3_client(
            profile_name=settings.s3_profile,
            region=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
        )
        _service = create_file_service(
            s3_client=client,
            page_size=settings.list_page_size,
            poll_interval=settings.poll_interval_seconds,
            link_expiry=settings.link_expiry_seconds,
        )
    return _service


def _describe(file: ScannedFile, service: FileService) -> str:
    return f"{service.to_location_string(file.location)}  {file.size} bytes  {file.content_hash}"


def _resolve_concurrency(requested: Optional[int], from_config: bool) -> int:
    """Pick an explicit value, else the config file value for the real service, else the library default."""
    if requested:
        return requested
    if from_config:
        return get_config().get_settings().concurrency
    return service_config.CONCURRENCY


def handle_copy(cmd: CopyCommand, service: Optional[FileService] = None) -> str:
    """
    Handle 'copy' command.

    Args:
        cmd: CopyCommand with source, destination and policy flags
        service: Optional FileService for dependency injection (testing)

    Returns:
        One line per copied file plus a summary
    """
    from_config = service is None
    if service is None:
        service = get_service()

    lines: list[str] = []

    def on_copied(operation: CopyOperation) -> None:
        lines.append(
            f"Copied: {service.to_location_string(operation.source.location)} -> "
            f"{service.to_location_string(operation.destination)}"
        )

    concurrency = _resolve_concurrency(cmd.concurrency, from_config)
    options = CopyOptions(
        concurrency=concurrency,
        overwrite=cmd.overwrite,
        skip_same=cmd.skip_same,
        listener=on_copied,
    )
    asyncio.run(service.copy(parse_location(cmd.source), parse_location(cmd.destination), options))
    lines.append(f"{len(lines)} file(s) copied")
    return "\n".join(lines)


def handle_delete(cmd: DeleteCommand, service: Optional[FileService] = None) -> str:
    """
    Handle 'delete' command.

    Args:
        cmd: DeleteCommand with target location
        service: Optional FileService for dependency injection (testing)

    Returns:
        One line per deleted file plus a summary
    """
    from_config = service is None
    if service is None:
        service = get_service()

    lines: list[str] = []

    def on_deleted(file: ScannedFile) -> None:
        lines.append(f"Deleted: {service.to_location_string(file.location)}")

    concurrency = _resolve_concurrency(cmd.concurrency, from_config)
    options = DeleteOptions(concurrency=concurrency, listener=on_deleted)
    asyncio.run(service.delete(parse_location(cmd.target), options))
    lines.append(f"{len(lines)} file(s) deleted")
    return "\n".join(lines)


def handle_list(cmd: ListCommand, service: Optional[FileService] = None) -> str:
    """
    Handle 'list' command.

    Args:
        cmd: ListCommand with target location
        service: Optional FileService for dependency injection (testing)

    Returns:
        One line per file, or a message when nothing is found
    """
    if service is None:
        service = get_service()

    async def collect() -> list[str]:
        return [_describe(f, service) async for f in service.list(parse_location(cmd.target))]

    lines = asyncio.run(collect())
    if not lines:
        return f"No files found at {cmd.target}"
    return "\n".join(lines)


def handle_read(cmd: ReadCommand, service: Optional[FileService] = None) -> str:
    """
    Handle 'read' command.

    Args:
        cmd: ReadCommand with target location
        service: Optional FileService for dependency injection (testing)

    Returns:
        File text, or a not-found message
    """
    if service is None:
        service = get_service()

    content = asyncio.run(service.read_text(parse_location(cmd.target)))
    return content.get_or_else(f"No such file: {cmd.target}")


def handle_write(cmd: WriteCommand, service: Optional[FileService] = None) -> str:
    """
    Handle 'write' command.

    Args:
        cmd: WriteCommand with destination, body and overwrite flag
        service: Optional FileService for dependency injection (testing)

    Returns:
        Description of the file now at the destination
    """
    if service is None:
        service = get_service()

    request = WriteRequest(destination=parse_location(cmd.destination), body=cmd.body)
    result = asyncio.run(service.write(request, WriteOptions(overwrite=cmd.overwrite)))
    return result.map(
        lambda f: f"Written: {_describe(f, service)}",
        lambda: f"Write to {cmd.destination} could not be confirmed",
    ).value


def handle_url(cmd: UrlCommand, service: Optional[FileService] = None) -> str:
    """
    Handle 'url' command.

    Args:
        cmd: UrlCommand with target location and optional expiry
        service: Optional FileService for dependency injection (testing)

    Returns:
        Presigned URL, or a not-found message
    """
    if service is None:
        service = get_service()

    url = asyncio.run(service.get_read_url(parse_location(cmd.target), cmd.expires))
    return url.get_or_else(f"No such file: {cmd.target}")


def handle_wait(cmd: WaitCommand, service: Optional[FileService] = None) -> str:
    """
    Handle 'wait' command.

    Args:
        cmd: WaitCommand with target location
        service: Optional FileService for dependency injection (testing)

    Returns:
        Description of the file once it exists
    """
    if service is None:
        service = get_service()

    result = asyncio.run(service.wait_for_file(parse_location(cmd.target)))
    return result.map(
        lambda f: f"Found: {_describe(f, service)}",
        lambda: f"{cmd.target} appeared but could not be scanned",
    ).value
