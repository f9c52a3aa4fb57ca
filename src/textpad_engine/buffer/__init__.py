"""Document storage, snapshot history and the editor session façade."""

from .history import HistoryManager
from .session import BufferDelta, BufferView, EditorSession, Transaction
from .text_buffer import TextBuffer
from .validation import BufferValidationError, ensure_offset, ensure_range

__all__ = [
    "BufferDelta",
    "BufferValidationError",
    "BufferView",
    "EditorSession",
    "HistoryManager",
    "TextBuffer",
    "Transaction",
    "ensure_offset",
    "ensure_range",
]
