"""Offset validation shared by buffer entry points."""

from __future__ import annotations

from typing import Tuple

from .text_buffer import TextBuffer


class BufferValidationError(RuntimeError):
    """Raised when a caller supplies offsets outside the document."""

    def __init__(self, message: str, *, offsets: Tuple[int, ...] = ()) -> None:
        super().__init__(message)
        self.offsets = offsets


def ensure_offset(buffer: TextBuffer, offset: int) -> int:
    if offset < 0 or offset > buffer.length:
        raise BufferValidationError("Offset out of range", offsets=(offset,))
    return offset


def ensure_range(buffer: TextBuffer, start: int, end: int) -> Tuple[int, int]:
    ensure_offset(buffer, start)
    ensure_offset(buffer, end)
    if start > end:
        start, end = end, start
    return start, end
