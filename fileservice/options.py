"""Option value objects for copy, delete and write operations."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from common.types import CopyOperation, ScannedFile
from fileservice import config

CopyListener = Callable[[CopyOperation], None]
DeleteListener = Callable[[ScannedFile], None]
ProgressListener = Callable[[int], None]


def _check_concurrency(concurrency: int) -> None:
    if not isinstance(concurrency, int) or isinstance(concurrency, bool) or concurrency < 1:
        raise ValueError(f"concurrency must be a positive integer, got {concurrency!r}")


@dataclass(frozen=True)
class S3WriteOptions:
    """
    Extras applied when the destination of a write is an S3 object.

    progress_listener receives the number of bytes transferred since the
    previous callback, as reported by boto3's managed transfer.
    """
    make_public: bool = False
    extra_args: Dict[str, Any] = field(default_factory=dict)
    progress_listener: Optional[ProgressListener] = None


@dataclass(frozen=True)
class WriteOptions(S3WriteOptions):
    """Options for a single file write."""
    overwrite: bool = False


@dataclass(frozen=True)
class CopyOptions(WriteOptions):
    """
    Options for a recursive copy.

    skip_same leaves content-identical destination files untouched even
    when overwrite is allowed.
    """
    concurrency: int = config.CONCURRENCY
    skip_same: bool = True
    listener: Optional[CopyListener] = None

    def __post_init__(self):
        _check_concurrency(self.concurrency)

    @property
    def always_overwrite(self) -> bool:
        return self.overwrite and not self.skip_same


@dataclass(frozen=True)
class DeleteOptions:
    """Options for a recursive delete."""
    concurrency: int = config.CONCURRENCY
    listener: Optional[DeleteListener] = None

    def __post_init__(self):
        _check_concurrency(self.concurrency)
