"""Shared data type definitions (LocalFile, S3File, ScannedFile, CopyOperation, etc.)."""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class LocalFile:
    """
    A file or folder on the local filesystem.
    """
    key: str


@dataclass(frozen=True)
class S3File:
    """
    A file or key prefix inside an S3 bucket.
    """
    bucket: str
    key: str


FileLocation = Union[LocalFile, S3File]


@dataclass(frozen=True)
class ScannedFile:
    """
    A location enriched with its content fingerprint.

    Only produced by scanning or listing a file that existed at the time.
    """
    location: FileLocation
    content_hash: str
    size: int
    mime_type: Optional[str] = None

    @property
    def key(self) -> str:
        return self.location.key

    @property
    def bucket(self) -> Optional[str]:
        return getattr(self.location, "bucket", None)


@dataclass(frozen=True)
class CopyOperation:
    """
    A single file copy resolved from a folder copy request.
    """
    source: ScannedFile
    destination: FileLocation


@dataclass(frozen=True)
class WriteRequest:
    """
    Body to persist at a destination.
    """
    destination: FileLocation
    body: Union[bytes, str]

    @property
    def data(self) -> bytes:
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body


@dataclass(frozen=True)
class ContentInfo:
    """
    Content fingerprint of a body.
    """
    content_hash: str
    size: int
