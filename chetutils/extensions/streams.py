"""
None-safe helpers over binary streams (`io` objects).

`NULL_STREAM` plays the part of an always-empty, discard-everything
stream; helpers that cannot open a source return it instead of None.
"""

from __future__ import annotations

import io
import os
import shutil
from typing import BinaryIO, Optional, Union

from .files import decode_text

PathLike = Union[str, os.PathLike]


class NullStream(io.RawIOBase):
    """Readable, writable, seekable stream with no content. Closing is a no-op."""

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        return 0

    def write(self, data) -> int:
        return len(data)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return 0

    def tell(self) -> int:
        return 0

    def truncate(self, size: Optional[int] = None) -> int:
        return 0

    def close(self) -> None:
        pass


NULL_STREAM = NullStream()


def _probe(stream: Optional[BinaryIO], method: str) -> bool:
    if stream is None:
        return False
    try:
        return getattr(stream, method)()
    except ValueError:
        # Closed stream
        return False


# =============================================================================
# CAPABILITIES
# =============================================================================

def can_read_safe(stream: Optional[BinaryIO]) -> bool:
    return _probe(stream, "readable")


def can_write_safe(stream: Optional[BinaryIO]) -> bool:
    return _probe(stream, "writable")


def can_seek_safe(stream: Optional[BinaryIO]) -> bool:
    return _probe(stream, "seekable")


def is_null_or_empty(stream: Optional[BinaryIO]) -> bool:
    return stream is None or get_length(stream) == 0


def is_memory_stream(stream: Optional[BinaryIO]) -> bool:
    return isinstance(stream, io.BytesIO)


def is_file_stream(stream: Optional[BinaryIO]) -> bool:
    return isinstance(getattr(stream, "raw", stream), io.FileIO)


def is_null_stream(stream: Optional[BinaryIO]) -> bool:
    return stream is NULL_STREAM


# =============================================================================
# POSITION
# =============================================================================

def get_length(stream: Optional[BinaryIO]) -> int:
    """Total size in bytes; 0 for None or non-seekable streams."""
    if isinstance(stream, io.BytesIO) and not stream.closed:
        return stream.getbuffer().nbytes
    if not can_seek_safe(stream):
        return 0
    position = stream.tell()
    length = stream.seek(0, io.SEEK_END)
    stream.seek(position)
    return length


def get_position(stream: Optional[BinaryIO]) -> int:
    return stream.tell() if can_seek_safe(stream) else 0


def set_position(stream: Optional[BinaryIO], position: int) -> None:
    """Move to `position` when it lies within [0, length]."""
    if can_seek_safe(stream) and 0 <= position <= get_length(stream):
        stream.seek(position)


def reset_position(stream: Optional[BinaryIO]) -> None:
    if can_seek_safe(stream):
        stream.seek(0)


# =============================================================================
# READ
# =============================================================================

def to_bytes(stream: Optional[BinaryIO]) -> bytes:
    """Whole contents of the stream; the current position is kept."""
    if stream is None:
        return b""
    if isinstance(stream, io.BytesIO):
        return stream.getvalue()
    seekable = can_seek_safe(stream)
    original = stream.tell() if seekable else 0
    if seekable:
        stream.seek(0)
    data = stream.read() or b""
    if seekable:
        stream.seek(original)
    return data


def to_text(stream: Optional[BinaryIO], encoding: Optional[str] = None) -> str:
    """Stream contents as text; the encoding is detected when not given."""
    return decode_text(to_bytes(stream), encoding)


def read_bytes(stream: Optional[BinaryIO], offset: int, count: int) -> bytes:
    """
    Up to `count` bytes starting at `offset`; the current position is kept.

    Empty for a negative offset, a non-positive count or an offset past the end.
    """
    if not can_read_safe(stream) or offset < 0 or count <= 0 or offset >= get_length(stream):
        return b""
    seekable = can_seek_safe(stream)
    original = stream.tell() if seekable else 0
    if seekable:
        stream.seek(offset)
    data = stream.read(count) or b""
    if seekable:
        stream.seek(original)
    return data


def read_text(stream: Optional[BinaryIO], offset: int, count: int, encoding: str = "utf-8") -> str:
    return read_bytes(stream, offset, count).decode(encoding, errors="replace")


# =============================================================================
# WRITE
# =============================================================================

def write_bytes(stream: Optional[BinaryIO], data: Optional[bytes]) -> None:
    """Replace the stream's contents with `data`."""
    if not can_write_safe(stream) or data is None:
        return
    stream.seek(0)
    stream.truncate(0)
    stream.write(data)
    stream.flush()


def write_text(stream: Optional[BinaryIO], text: Optional[str], encoding: str = "utf-8") -> None:
    if not can_write_safe(stream):
        return
    write_bytes(stream, (text or "").encode(encoding))


def save_to_file(stream: Optional[BinaryIO], file_path: Optional[PathLike]) -> None:
    """Write the whole stream, from the start, to `file_path`."""
    if stream is None or not file_path:
        return
    reset_position(stream)
    with open(file_path, "wb") as f:
        shutil.copyfileobj(stream, f)


def copy_to_stream(stream: Optional[BinaryIO], target: Optional[BinaryIO]) -> None:
    if stream is None or target is None:
        return
    reset_position(stream)
    shutil.copyfileobj(stream, target)
    target.flush()


def close_safe(stream: Optional[BinaryIO]) -> None:
    if stream is not None:
        stream.close()


# =============================================================================
# FACTORIES
# =============================================================================

def file_to_stream(file_path: Optional[PathLike]) -> BinaryIO:
    """Open a file for reading, or `NULL_STREAM` when it does not exist."""
    if not file_path or not os.path.isfile(file_path):
        return NULL_STREAM
    return open(file_path, "rb")


def text_to_stream(text: Optional[str], encoding: str = "utf-8") -> io.BytesIO:
    return io.BytesIO((text or "").encode(encoding))


def bytes_to_stream(data: Optional[bytes]) -> BinaryIO:
    if data is None:
        return NULL_STREAM
    return io.BytesIO(data)
