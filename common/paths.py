"""Path normalization for local paths and S3 keys."""

import os
from dataclasses import replace
from typing import TypeVar

from common.constants import S3_SCHEME
from common.types import FileLocation, LocalFile, S3File

L = TypeVar("L", LocalFile, S3File)


def normalize_s3_key(key: str) -> str:
    """
    Convert a path-like string into a canonical S3 key.

    OS separators become forward slashes and a single leading slash is
    dropped so the key is relative to the bucket root.

    Args:
        key: Raw key or path

    Returns:
        Normalized S3 key
    """
    normalized = key.replace(os.sep, "/").replace("\\", "/")
    if normalized.startswith("/"):
        normalized = normalized[1:]
    return normalized


def normalize_local_path(path: str) -> str:
    """
    Convert a forward-slash path into an OS-native normalized path.

    Args:
        path: Raw local path

    Returns:
        Normalized local path
    """
    return os.path.normpath(path.replace("/", os.sep))


def normalize_location(location: L) -> L:
    """Return a copy of location with its key normalized for its backend."""
    if isinstance(location, S3File):
        return replace(location, key=normalize_s3_key(location.key))
    return replace(location, key=normalize_local_path(location.key))


def to_s3_location_string(location: S3File) -> str:
    """Render an S3 location as s3://bucket/key."""
    return f"{S3_SCHEME}{location.bucket}/{location.key}"


def parse_location(raw: str) -> FileLocation:
    """
    Parse a user-supplied location string.

    Args:
        raw: Either "s3://bucket/key" or a local path

    Returns:
        S3File or LocalFile
    """
    if raw.startswith(S3_SCHEME):
        bucket, _, key = raw[len(S3_SCHEME):].partition("/")
        if not bucket:
            raise ValueError(f"Missing bucket in {raw!r}")
        return S3File(bucket=bucket, key=key)
    return LocalFile(key=raw)


def replace_folder_prefix(key: str, source_folder: str, destination_folder: str) -> str:
    """
    Map a key under source_folder to the equivalent key under destination_folder.

    Only the leading occurrence of source_folder is replaced. The remainder
    is joined to destination_folder with a single "/" whatever separators
    either side carries; the caller normalizes the result for its backend.

    Args:
        key: Key of a file listed under source_folder
        source_folder: Normalized source folder key
        destination_folder: Normalized destination folder key

    Returns:
        Destination key
    """
    if not key.startswith(source_folder):
        raise ValueError(f"{key!r} is not under {source_folder!r}")
    remainder = key[len(source_folder):].lstrip("/\\")
    if not remainder:
        return destination_folder
    if not destination_folder:
        return remainder
    folder = destination_folder.rstrip("/\\")
    return f"{folder}/{remainder}"
