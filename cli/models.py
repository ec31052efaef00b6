"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class CopyCommand:
    """Copy a file or folder to another location."""

    source: str
    destination: str
    overwrite: bool = False
    skip_same: bool = True
    concurrency: Optional[int] = None
    command: Literal["copy"] = "copy"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete a file or every file under a folder."""

    target: str
    concurrency: Optional[int] = None
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class ListCommand:
    """List files at or under a location."""

    target: str
    command: Literal["list"] = "list"


@dataclass(frozen=True)
class ReadCommand:
    """Print the text content of a file."""

    target: str
    command: Literal["read"] = "read"


@dataclass(frozen=True)
class WriteCommand:
    """Write text to a file."""

    destination: str
    body: str
    overwrite: bool = False
    command: Literal["write"] = "write"


@dataclass(frozen=True)
class UrlCommand:
    """Print a temporary download URL for an S3 file."""

    target: str
    expires: Optional[int] = None
    command: Literal["url"] = "url"


@dataclass(frozen=True)
class WaitCommand:
    """Block until a file exists."""

    target: str
    command: Literal["wait"] = "wait"


CommandRequest = (
    CopyCommand
    | DeleteCommand
    | ListCommand
    | ReadCommand
    | WriteCommand
    | UrlCommand
    | WaitCommand
)
