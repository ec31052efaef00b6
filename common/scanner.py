"""Content fingerprinting: MD5 digest and byte size of a body or stream."""

import hashlib
import mimetypes
from typing import BinaryIO, Optional, Union

from common.constants import HASH_CHUNK_SIZE_BYTES
from common.types import ContentInfo


def guess_mime_type(key: str) -> Optional[str]:
    """
    Guess a MIME type from a file key's extension.

    Args:
        key: File path or S3 key

    Returns:
        MIME type string, or None if the extension is unknown
    """
    mime_type, _ = mimetypes.guess_type(key)
    return mime_type


def compute_content_info(body: Union[bytes, str]) -> ContentInfo:
    """
    Fingerprint an in-memory body.

    MD5 is used so local fingerprints compare equal to single-part S3 ETags.

    Args:
        body: Bytes, or text encoded as UTF-8

    Returns:
        ContentInfo with hex digest and size in bytes
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
    return ContentInfo(content_hash=hashlib.md5(body).hexdigest(), size=len(body))


def compute_stream_content_info(stream: BinaryIO, piece_size: int = HASH_CHUNK_SIZE_BYTES) -> ContentInfo:
    """
    Fingerprint a binary stream without loading it into memory.

    Args:
        stream: Readable binary stream positioned at the start
        piece_size: Read size in bytes

    Returns:
        ContentInfo with hex digest and size in bytes
    """
    calculator = IncrementalChecksumCalculator()
    while True:
        piece = stream.read(piece_size)
        if not piece:
            break
        calculator.update(piece)
    return calculator.finalize()


class IncrementalChecksumCalculator:
    """
    Calculate an MD5 fingerprint incrementally for streaming data.

    Usage:
        calculator = IncrementalChecksumCalculator()
        calculator.update(piece1)
        calculator.update(piece2)
        info = calculator.finalize()
    """

    def __init__(self):
        self._hasher = hashlib.md5()
        self._size = 0
        self._finalized = False

    def update(self, data: bytes) -> None:
        if self._finalized:
            raise ValueError("Cannot update after finalization")
        self._hasher.update(data)
        self._size += len(data)

    def finalize(self) -> ContentInfo:
        """
        Finalize the calculation.

        Returns:
            ContentInfo with hex digest and total size
        """
        self._finalized = True
        return ContentInfo(content_hash=self._hasher.hexdigest(), size=self._size)

    def reset(self) -> None:
        """Reset calculator to initial state."""
        self._hasher = hashlib.md5()
        self._size = 0
        self._finalized = False
