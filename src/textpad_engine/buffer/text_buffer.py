"""Single-string document storage."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TextBuffer:
    """Owns the document content.

    Content is held as one ``str``; installing new content swaps the
    reference, so every value handed out by ``snapshot`` stays valid no matter
    what happens to the buffer afterwards.
    """

    _content: str = ""
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "TextBuffer":
        return cls(_content=text)

    @property
    def content(self) -> str:
        return self._content

    @property
    def length(self) -> int:
        return len(self._content)

    def snapshot(self) -> str:
        """Return the current content as an independent value."""

        return self._content

    def set_content(self, content: str, *, dirty: bool = True) -> None:
        self._content = content
        self.version += 1
        self.dirty = dirty

    def mark_clean(self) -> None:
        self.dirty = False
