"""Executable Textual app that hosts the editing engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Footer, Header, Input, Static, TextArea
    from textual.widgets.text_area import Selection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use textpad_engine.adapters.textual.app"
    ) from exc

from textpad_engine.buffer import BufferView, EditorSession
from textpad_engine.config import EngineSettings
from textpad_engine.runtime import telemetry
from textpad_engine.search import MatchSet
from textpad_engine.spelling import SpellCheckResult

from .controller import TextualEditorAdapter, TextualUIHooks


def offset_to_location(text: str, offset: int) -> Tuple[int, int]:
    """Translate a character offset into a TextArea ``(row, column)``."""

    row = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return (row, offset - line_start)


@dataclass
class UIState:
    path: Optional[Path] = None
    status_text: str = ""


class TextpadApp(App[None]):
    """Plain-text editor shell: one document, a command line and a status line."""

    TITLE = "Textpad"

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
		border: round $accent;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 3;
	}
	"""

    BINDINGS = [
        Binding("ctrl+z", "undo", "Undo", priority=True),
        Binding("ctrl+y", "redo", "Redo", priority=True),
        Binding("ctrl+f", "prompt('find ')", "Find", priority=True),
        Binding("ctrl+r", "prompt('replace ')", "Replace", priority=True),
        Binding("f7", "spell_check", "Spell check"),
        Binding("ctrl+n", "new_document", "New", priority=True),
        Binding("ctrl+o", "prompt('edit ')", "Open", priority=True),
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("escape", "focus_editor", "Editor", show=False),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        session: EditorSession,
        *,
        settings: EngineSettings,
        path: Optional[Path] = None,
    ) -> None:
        super().__init__()
        self.session = session
        self.settings = settings
        self._state = UIState(path=path)
        self.adapter: TextualEditorAdapter | None = None
        self._editor: TextArea | None = None
        self._status_widget: Static | None = None
        self._command_widget: Input | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        self._editor = TextArea(self.session.text, id="editor")
        yield self._editor
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        self._command_widget = Input(placeholder=":command", id="command-line")
        yield self._command_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_matches=self._show_matches,
            show_spelling=self._show_spelling,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        if self._state.path is not None:
            self._open_path(self._state.path)
        if self._editor:
            self._editor.focus()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.adapter:
            self.adapter.handle_host_edit(event.text_area.text)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        event.input.value = ""
        self.adapter.submit_command(event.value)
        self.action_focus_editor()

    def action_undo(self) -> None:
        if self.adapter:
            self.adapter.undo()

    def action_redo(self) -> None:
        if self.adapter:
            self.adapter.redo()

    def action_spell_check(self) -> None:
        if self.adapter:
            self.adapter.spell_check()

    def action_new_document(self) -> None:
        if self.adapter:
            self.adapter.new_document()
            self._state.path = None

    def action_save(self) -> None:
        if self.adapter:
            self.adapter.submit_command("write")

    def action_prompt(self, prefix: str) -> None:
        if self._command_widget:
            self._command_widget.value = prefix
            self._command_widget.cursor_position = len(prefix)
            self._command_widget.focus()

    def action_focus_editor(self) -> None:
        if self._editor:
            self._editor.focus()

    def _update_buffer(self, view: BufferView) -> None:
        if self._editor and self._editor.text != view.text:
            self._editor.load_text(view.text)
        name = self._state.path.name if self._state.path else self.session.name
        self.sub_title = f"{name} *" if view.dirty else name

    def _update_status(self, status: str) -> None:
        if not status:
            return
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_matches(self, matches: MatchSet) -> None:
        if not self._editor or matches.first is None:
            return
        start, end = next(matches.spans())
        text = self._editor.text
        self._editor.selection = Selection(
            offset_to_location(text, start), offset_to_location(text, end)
        )

    def _show_spelling(self, report: SpellCheckResult) -> None:
        if report.available and not report.clean:
            self.notify(", ".join(report.misspelled), title="Misspelled words")

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if not isinstance(payload, dict):
            return
        args = [str(arg) for arg in payload.get("args", [])]
        if name == "command.edit":
            if args:
                self._open_path(Path(args[0]))
            elif self._state.path is not None:
                self._open_path(self._state.path)
        elif name == "command.write":
            self._save_path(Path(args[0]) if args else self._state.path)
        elif name == "command.quit":
            if payload.get("dirty") and not payload.get("force"):
                self._update_status("Unsaved changes (use quit! to discard).")
            else:
                self.exit()

    def _open_path(self, path: Path) -> None:
        if not self.adapter:
            return
        try:
            text = path.read_text(encoding=self.settings.encoding)
        except (OSError, UnicodeDecodeError):
            self._update_status("Failed to open file.")
            return
        self._state.path = path
        self.adapter.load_document(text, name=path.name)
        self._update_status(f"Opened {path}")

    def _save_path(self, path: Optional[Path]) -> None:
        if not self.adapter:
            return
        if path is None:
            self.action_prompt("write ")
            return
        try:
            path.write_text(self.session.text, encoding=self.settings.encoding)
        except OSError:
            self._update_status("Failed to save file.")
            return
        self._state.path = path
        self.adapter.mark_saved(name=path.name)
        self._update_status(f"Saved {path}")

    def _log_line(self, line: str) -> None:
        telemetry.record_event("adapter.log", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Textpad editor.")
    parser.add_argument("path", nargs="?", help="File to open on startup")
    parser.add_argument(
        "--dictionary",
        help="Newline-delimited word list (default: $TEXTPAD_ENGINE_DICTIONARY or dict.txt)",
    )
    parser.add_argument(
        "--encoding",
        help="Text encoding for opened and saved files (default: utf-8)",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        help="telelog preset to apply before startup",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = EngineSettings.from_env().with_overrides(
        dictionary_path=args.dictionary,
        encoding=args.encoding,
        telemetry_preset=args.log_preset,
    )
    if settings.telemetry_preset:
        telemetry.configure(preset=settings.telemetry_preset)
    session = EditorSession.from_settings(settings)
    path = Path(args.path) if args.path else None
    TextpadApp(session, settings=settings, path=path).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
