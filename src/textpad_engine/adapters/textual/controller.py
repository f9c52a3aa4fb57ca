"""Textual adapter that feeds host edits into an EditorSession."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from textpad_engine.actions import ActionContext, ActionResult, EventBus
from textpad_engine.actions import command as command_actions
from textpad_engine.buffer import BufferDelta, BufferView, EditorSession
from textpad_engine.search import MatchSet
from textpad_engine.spelling import SpellCheckResult


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter invokes to update Textual widgets."""

    update_buffer: Callable[[BufferView], None]
    update_status: Callable[[str], None] = _noop
    show_matches: Callable[[MatchSet], None] = _noop
    show_spelling: Callable[[SpellCheckResult], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges an EditorSession and its event bus to a Textual surface.

    Every host edit goes through ``handle_host_edit`` synchronously, in the
    order the widget reports it.
    """

    def __init__(
        self,
        session: EditorSession,
        hooks: TextualUIHooks,
        *,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.context = ActionContext(session=session, bus=bus or EventBus())
        self._subscribe_events()
        self._refresh_buffer()

    def handle_host_edit(self, text: str) -> BufferDelta:
        delta = self.session.apply_edit(text, label="host_edit")
        self._log_state("edit ->", changed=delta.changed)
        if delta.changed:
            self._refresh_buffer()
        return delta

    def undo(self) -> ActionResult:
        return self.submit_command("undo")

    def redo(self) -> ActionResult:
        return self.submit_command("redo")

    def spell_check(self) -> ActionResult:
        return self.submit_command("spell")

    def new_document(self) -> ActionResult:
        return self.submit_command("new")

    def submit_command(self, line: str) -> ActionResult:
        self._log_state("command ->", line=line)
        result = command_actions.submit_command_line(self.context, line)
        self._after_result(result)
        self._log_state("result <-", status=result.status, message=result.message)
        return result

    def load_document(self, text: str, *, name: Optional[str] = None) -> BufferDelta:
        delta = self.session.load_document(text, name=name)
        self._log_state("load ->", name=name)
        self._refresh_buffer()
        return delta

    def mark_saved(self, *, name: Optional[str] = None) -> None:
        self.session.mark_saved(name=name)
        self._log_state("saved ->", name=name)
        self._refresh_buffer()

    def _after_result(self, result: ActionResult) -> None:
        status = _describe(result)
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()

    def _subscribe_events(self) -> None:
        bus = self.context.bus
        for event in (
            "search.matches",
            "spell.report",
            "buffer.replace",
            "document.new",
            "command.edit",
            "command.write",
            "command.quit",
            "command.error",
            "command.invalid",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        if name == "search.matches" and isinstance(payload, MatchSet):
            self.hooks.show_matches(payload)
        elif name == "spell.report" and isinstance(payload, SpellCheckResult):
            self.hooks.show_spelling(payload)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.session.view())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        history = self.session.history
        return {
            "session": self.session.name,
            "version": self.session.buffer.version,
            "dirty": self.session.buffer.dirty,
            "past": len(history.past),
            "future": len(history.future),
        }


_STATUS_MESSAGES = {
    "command_empty": "",
    "command_error": "Unknown command: {message}",
    "invalid_query": "Invalid query: {message}",
    "search_found": "Found at positions: {message}",
    "search_empty": "Text not found.",
    "replace_done": "Replaced {message} occurrence(s).",
    "spell_unavailable": "Dictionary not loaded. Spell check unavailable.",
    "spell_clean": "No spelling errors found.",
    "spell_misspelled": "Misspelled words: {message}",
    "undo": "Undo",
    "undo_floor": "Nothing to undo.",
    "redo": "Redo",
    "redo_empty": "Nothing to redo.",
    "document_new": "New document",
    # Storage and quit commands report through the host.
    "command_edit": "",
    "command_edit_force": "",
    "command_write": "",
    "command_write_force": "",
    "command_quit": "",
    "command_quit_force": "",
    "command_wq": "",
    "command_wq_force": "",
}


def _describe(result: ActionResult) -> str:
    template = _STATUS_MESSAGES.get(result.status)
    if template is None:
        return result.message or result.status
    return template.format(message=result.message or "")


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
