"""Editor session façade combining the buffer, its history and the dictionary."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from textpad_engine.config import EngineSettings
from textpad_engine.runtime import telemetry
from textpad_engine.search import MatchSet, count_replacements, find_all, replace_all
from textpad_engine.spelling import Dictionary, SpellCheckResult, check, load_dictionary

from .history import HistoryManager
from .text_buffer import TextBuffer
from .validation import ensure_offset, ensure_range


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    dirty: bool
    can_undo: bool
    can_redo: bool


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    label: str
    changed: bool
    replacements: int = 0


class EditorSession:
    """Single entry point for every change made to the document.

    Each mutation installs the new content and records it in history within
    the same call, so history order always follows content order.
    """

    def __init__(
        self,
        *,
        name: str = "untitled",
        text: str = "",
        dictionary: Optional[Dictionary] = None,
    ) -> None:
        self.name = name
        self.buffer = TextBuffer.from_text(text)
        self.history = HistoryManager(text)
        self.dictionary = dictionary or Dictionary()

    @classmethod
    def from_settings(
        cls, settings: EngineSettings, *, name: str = "untitled", text: str = ""
    ) -> "EditorSession":
        dictionary = None
        if settings.dictionary_path is not None:
            dictionary = load_dictionary(
                settings.dictionary_path, encoding=settings.encoding
            )
        return cls(name=name, text=text, dictionary=dictionary)

    @property
    def text(self) -> str:
        return self.buffer.content

    def view(self) -> BufferView:
        return BufferView(
            version=self.buffer.version,
            text=self.buffer.snapshot(),
            dirty=self.buffer.dirty,
            can_undo=self.history.can_undo(),
            can_redo=self.history.can_redo(),
        )

    def apply_edit(self, content: str, *, label: str = "edit") -> BufferDelta:
        with Transaction(self, label) as tx:
            changed = content != self.buffer.content
            if changed:
                self.buffer.set_content(content)
            tx.commit(content)
        return self._delta(label, changed)

    def insert_text(self, offset: int, text: str) -> BufferDelta:
        ensure_offset(self.buffer, offset)
        current = self.buffer.content
        return self.apply_edit(
            current[:offset] + text + current[offset:], label="insert_text"
        )

    def delete_range(self, start: int, end: int) -> BufferDelta:
        start, end = ensure_range(self.buffer, start, end)
        current = self.buffer.content
        return self.apply_edit(current[:start] + current[end:], label="delete_range")

    def undo(self) -> BufferDelta:
        return self._navigate("undo")

    def redo(self) -> BufferDelta:
        return self._navigate("redo")

    def new_document(self, *, name: str = "untitled") -> BufferDelta:
        return self.load_document("", name=name, label="new_document")

    def load_document(
        self, content: str, *, name: Optional[str] = None, label: str = "load_document"
    ) -> BufferDelta:
        with Transaction(self, label):
            if name is not None:
                self.name = name
            self.buffer.set_content(content, dirty=False)
            self.history.reset(content)
        return self._delta(label, True)

    def mark_saved(self, *, name: Optional[str] = None) -> None:
        if name is not None:
            self.name = name
        self.buffer.mark_clean()

    def find_all(self, term: str) -> MatchSet:
        return find_all(self.buffer.snapshot(), term)

    def replace_all(self, find: str, replace: str) -> BufferDelta:
        snapshot = self.buffer.snapshot()
        count = count_replacements(snapshot, find)
        updated = replace_all(snapshot, find, replace)
        delta = self.apply_edit(updated, label="replace_all")
        delta.replacements = count
        return delta

    def spell_check(self) -> SpellCheckResult:
        return check(self.buffer.snapshot(), self.dictionary)

    def _navigate(self, label: str) -> BufferDelta:
        with Transaction(self, label):
            before = self.buffer.version
            if label == "undo":
                moved = self.history.can_undo()
                content = self.history.undo()
            else:
                moved = self.history.can_redo()
                content = self.history.redo()
            if moved:
                self.buffer.set_content(content)
        return self._delta(label, self.buffer.version != before)

    def _delta(self, label: str, changed: bool) -> BufferDelta:
        return BufferDelta(
            version=self.buffer.version,
            text=self.buffer.content,
            label=label,
            changed=changed,
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one session mutation in a telemetry span."""

    def __init__(self, session: EditorSession, label: str) -> None:
        self.session = session
        self.label = label
        self.recorded = False
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"session::{self.label}",
            component="session",
            metadata={"session": self.session.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def commit(self, content: str) -> bool:
        self.recorded = self.session.history.record_if_changed(content)
        if self._handle is not None:
            self._handle.add_metadata("recorded", self.recorded)
        return self.recorded

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["BufferDelta", "BufferView", "EditorSession", "Transaction"]
