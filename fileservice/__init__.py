"""Unified local filesystem and S3 file service."""

from fileservice.engine import FileService, process_in_batches
from fileservice.dispatcher import PolyBackend
from fileservice.local_backend import LocalBackend
from fileservice.memory_backend import MemoryBackend
from fileservice.s3_backend import S3Backend
from fileservice.options import CopyOptions, DeleteOptions, WriteOptions
from fileservice.factory import create_file_service

__all__ = [
    "FileService",
    "PolyBackend",
    "LocalBackend",
    "MemoryBackend",
    "S3Backend",
    "CopyOptions",
    "DeleteOptions",
    "WriteOptions",
    "create_file_service",
    "process_in_batches",
]
