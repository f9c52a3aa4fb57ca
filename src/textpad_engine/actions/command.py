"""Actions that evaluate editor command lines (find, replace, spell, ...).

A command line is a verb followed by one space and an argument string. The
argument string reaches find and replace exactly as typed: quotes,
backslashes and runs of spaces are all part of the term.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, List, MutableMapping, Tuple, cast

from textpad_engine.search import InvalidQuery

from .base import ActionContext, ActionResult

CommandHandler = Callable[[ActionContext, str], ActionResult]

# ``replace /FIND/REPLACE/`` uses the first character as the separator when it
# is one of these; anything else is ``replace FIND REPLACE``.
REPLACE_DELIMITERS = "/|"


def _command_state(context: ActionContext) -> MutableMapping[str, object]:
    state = cast(
        MutableMapping[str, object], context.extras.setdefault("command_state", {})
    )
    state.setdefault("history", [])
    return state


def split_command(text: str) -> Tuple[str, str]:
    """Split ``text`` into its verb and the raw argument string."""

    verb, _, rest = text.lstrip().partition(" ")
    return verb, rest


def parse_replace(rest: str) -> Tuple[str, str]:
    """Return ``(find, replacement)`` from a replace argument string.

    ``/it's/it is/`` and ``|a/b|c|`` split on their leading delimiter; the
    closing delimiter is optional. Otherwise the first space separates the
    term from a replacement that keeps its own spaces:
    ``it's it is`` -> ``("it's", "it is")``.
    """

    if rest and rest[0] in REPLACE_DELIMITERS:
        delimiter = rest[0]
        find, _, tail = rest[1:].partition(delimiter)
        replacement, _, _ = tail.partition(delimiter)
        return find, replacement
    find, _, replacement = rest.partition(" ")
    return find, replacement


def submit_command_line(context: ActionContext, text: str) -> ActionResult:
    line = text.lstrip()
    context.bus.emit("command.submit", line)
    if not line.strip():
        return ActionResult(consumed=True, status="command_empty")
    history = _command_state(context).get("history")
    if isinstance(history, list):
        history.append(line)

    command, rest = split_command(line)
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _unknown_command(context, command)
    try:
        return handler(context, rest)
    except InvalidQuery as exc:
        return _invalid_query(context, str(exc))


def _unknown_command(context: ActionContext, command: str) -> ActionResult:
    context.bus.emit("command.error", command)
    return ActionResult(consumed=True, status="command_error", message=command)


def _invalid_query(context: ActionContext, reason: str) -> ActionResult:
    context.bus.emit("command.invalid", reason)
    return ActionResult(consumed=True, status="invalid_query", message=reason)


def _path_args(rest: str) -> List[str]:
    path = rest.strip()
    return [path] if path else []


def _handle_find(context: ActionContext, rest: str) -> ActionResult:
    matches = context.session.find_all(rest)
    context.bus.emit("search.matches", matches)
    if not matches:
        return ActionResult(consumed=True, status="search_empty", payload=matches)
    positions = ", ".join(str(offset) for offset in matches)
    return ActionResult(
        consumed=True,
        status="search_found",
        message=positions,
        payload=matches,
    )


def _handle_replace(context: ActionContext, rest: str) -> ActionResult:
    find, replacement = parse_replace(rest)
    delta = context.session.replace_all(find, replacement)
    context.bus.emit("buffer.replace", delta)
    return ActionResult(
        consumed=True,
        status="replace_done",
        message=str(delta.replacements),
        payload=delta,
    )


def _handle_spell(context: ActionContext, rest: str) -> ActionResult:
    del rest
    report = context.session.spell_check()
    context.bus.emit("spell.report", report)
    if not report.available:
        status = "spell_unavailable"
    elif report.clean:
        status = "spell_clean"
    else:
        status = "spell_misspelled"
    return ActionResult(
        consumed=True,
        status=status,
        message=", ".join(report.misspelled) or None,
        payload=report,
    )


def _handle_undo(context: ActionContext, rest: str) -> ActionResult:
    del rest
    delta = context.session.undo()
    context.bus.emit("buffer.undo", delta)
    status = "undo" if delta.changed else "undo_floor"
    return ActionResult(consumed=True, status=status, payload=delta)


def _handle_redo(context: ActionContext, rest: str) -> ActionResult:
    del rest
    delta = context.session.redo()
    context.bus.emit("buffer.redo", delta)
    status = "redo" if delta.changed else "redo_empty"
    return ActionResult(consumed=True, status=status, payload=delta)


def _handle_new(context: ActionContext, rest: str) -> ActionResult:
    del rest
    delta = context.session.new_document()
    context.bus.emit("document.new", delta)
    return ActionResult(consumed=True, status="document_new", payload=delta)


def _handle_edit(
    context: ActionContext, rest: str, *, force: bool = False
) -> ActionResult:
    args = _path_args(rest)
    context.bus.emit("command.edit", {"force": force, "args": args})
    status = "command_edit_force" if force else "command_edit"
    return ActionResult(consumed=True, status=status, message=" ".join(args) or None)


def _handle_write(
    context: ActionContext, rest: str, *, force: bool = False
) -> ActionResult:
    args = _path_args(rest)
    _emit_write(context, args, force=force)
    status = "command_write_force" if force else "command_write"
    return ActionResult(consumed=True, status=status, message=" ".join(args) or None)


def _handle_quit(
    context: ActionContext, rest: str, *, force: bool = False
) -> ActionResult:
    del rest
    _emit_quit(context, force=force)
    status = "command_quit_force" if force else "command_quit"
    return ActionResult(consumed=True, status=status)


def _handle_wq(
    context: ActionContext, rest: str, *, force: bool = False
) -> ActionResult:
    _emit_write(context, _path_args(rest), force=force)
    _emit_quit(context, force=force)
    status = "command_wq_force" if force else "command_wq"
    return ActionResult(consumed=True, status=status)


def _emit_write(context: ActionContext, args: List[str], *, force: bool) -> None:
    payload = {
        "force": force,
        "args": list(args),
        "text": context.session.buffer.snapshot(),
    }
    context.bus.emit("command.write", payload)


def _emit_quit(context: ActionContext, *, force: bool) -> None:
    payload = {"force": force, "dirty": context.session.buffer.dirty}
    context.bus.emit("command.quit", payload)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "find": _handle_find,
    "f": _handle_find,
    "replace": _handle_replace,
    "s": _handle_replace,
    "spell": _handle_spell,
    "undo": _handle_undo,
    "u": _handle_undo,
    "redo": _handle_redo,
    "red": _handle_redo,
    "new": _handle_new,
    "enew": _handle_new,
    "edit": _handle_edit,
    "e": _handle_edit,
    "edit!": partial(_handle_edit, force=True),
    "e!": partial(_handle_edit, force=True),
    "write": _handle_write,
    "w": _handle_write,
    "write!": partial(_handle_write, force=True),
    "w!": partial(_handle_write, force=True),
    "quit": _handle_quit,
    "q": _handle_quit,
    "quit!": partial(_handle_quit, force=True),
    "q!": partial(_handle_quit, force=True),
    "wq": _handle_wq,
    "wq!": partial(_handle_wq, force=True),
}


def command_names() -> tuple[str, ...]:
    return tuple(sorted(_COMMAND_HANDLERS))


__all__ = [
    "REPLACE_DELIMITERS",
    "command_names",
    "parse_replace",
    "split_command",
    "submit_command_line",
]
