from __future__ import annotations

from typing import Dict, List

from textpad_engine.actions import (
    ActionContext,
    EventBus,
    command_names,
    parse_replace,
    split_command,
    submit_command_line,
)
from textpad_engine.buffer import EditorSession
from textpad_engine.search import MatchSet
from textpad_engine.spelling import Dictionary


def make_context(text: str = "", *words: str) -> ActionContext:
    session = EditorSession(text=text, dictionary=Dictionary.from_words(words))
    return ActionContext(session=session, bus=EventBus(), extras={})


def test_find_emits_matches() -> None:
    context = make_context("aaa")
    found: List[object] = []
    context.bus.subscribe("search.matches", lambda payload: found.append(payload))

    result = submit_command_line(context, "find aa")

    assert result.status == "search_found"
    assert result.message == "0, 1"
    assert found == [MatchSet(term="aa", offsets=(0, 1))]


def test_find_term_keeps_inner_spaces() -> None:
    context = make_context("a b  a b")

    result = submit_command_line(context, "find a b")

    assert isinstance(result.payload, MatchSet)
    assert result.payload.offsets == (0, 5)


def test_find_term_with_apostrophe() -> None:
    context = make_context("I don't know")

    result = submit_command_line(context, "find don't")

    assert result.status == "search_found"
    assert result.message == "2"


def test_find_term_keeps_backslashes() -> None:
    context = make_context(r"C:\dir and C:dir")

    result = submit_command_line(context, r"find C:\dir")

    assert isinstance(result.payload, MatchSet)
    assert result.payload.offsets == (0,)


def test_find_term_keeps_runs_of_spaces() -> None:
    context = make_context("a b a  b")

    result = submit_command_line(context, "find a  b")

    assert isinstance(result.payload, MatchSet)
    assert result.payload.offsets == (4,)


def test_find_without_match_reports_empty() -> None:
    context = make_context("hello")

    result = submit_command_line(context, "f xyz")

    assert result.status == "search_empty"


def test_find_without_term_is_invalid_query() -> None:
    context = make_context("hello")
    invalid: List[object] = []
    context.bus.subscribe("command.invalid", lambda payload: invalid.append(payload))

    result = submit_command_line(context, "find")

    assert result.status == "invalid_query"
    assert invalid


def test_replace_commits_and_reports_count() -> None:
    context = make_context("aaaa")

    result = submit_command_line(context, "replace aa b")

    assert result.status == "replace_done"
    assert result.message == "2"
    assert context.session.text == "bb"
    assert context.session.history.past == ("aaaa", "bb")


def test_replace_with_empty_find_keeps_buffer() -> None:
    context = make_context("content")

    result = submit_command_line(context, "replace //x/")

    assert result.status == "invalid_query"
    assert context.session.text == "content"


def test_replace_without_replacement_deletes_matches() -> None:
    context = make_context("a-b-c")

    submit_command_line(context, "s -")

    assert context.session.text == "abc"


def test_replace_keeps_replacement_as_typed() -> None:
    context = make_context("it's late, it's dark")

    result = submit_command_line(context, "replace it's it is")

    assert result.message == "2"
    assert context.session.text == "it is late, it is dark"


def test_replace_delimited_form_allows_spaces_in_term() -> None:
    context = make_context("a b, a b")

    submit_command_line(context, "replace /a b/c/")
    submit_command_line(context, "s |c|x/y")

    assert context.session.text == "x/y, x/y"


def test_split_command_and_parse_replace() -> None:
    assert split_command("find  a b ") == ("find", " a b ")
    assert split_command("undo") == ("undo", "")
    assert parse_replace("it's it is") == ("it's", "it is")
    assert parse_replace("/a b/c") == ("a b", "c")
    assert parse_replace(r"C:\dir D:\dir") == (r"C:\dir", r"D:\dir")


def test_spell_statuses_are_distinct() -> None:
    unavailable = submit_command_line(make_context("hello"), "spell")
    clean = submit_command_line(make_context("hello", "hello"), "spell")
    misspelled = submit_command_line(make_context("Hello, wrold!", "hello"), "spell")

    assert unavailable.status == "spell_unavailable"
    assert clean.status == "spell_clean"
    assert misspelled.status == "spell_misspelled"
    assert misspelled.message == "wrold"


def test_undo_redo_commands() -> None:
    context = make_context()
    context.session.apply_edit("a")

    assert submit_command_line(context, "undo").status == "undo"
    assert submit_command_line(context, "u").status == "undo_floor"
    assert submit_command_line(context, "redo").status == "redo"
    assert submit_command_line(context, "redo").status == "redo_empty"
    assert context.session.text == "a"


def test_short_redo_alias() -> None:
    context = make_context()
    context.session.apply_edit("a")
    submit_command_line(context, "u")

    assert submit_command_line(context, "red").status == "redo"
    assert context.session.text == "a"


def test_new_resets_document() -> None:
    context = make_context("old")
    context.session.apply_edit("older")

    result = submit_command_line(context, "new")

    assert result.status == "document_new"
    assert context.session.history.past == ("",)


def test_write_and_quit_events() -> None:
    context = make_context("body")
    writes: List[Dict[str, object]] = []
    quits: List[Dict[str, object]] = []
    context.bus.subscribe("command.write", lambda payload: writes.append(payload))
    context.bus.subscribe("command.quit", lambda payload: quits.append(payload))

    result = submit_command_line(context, "wq out.txt")

    assert result.status == "command_wq"
    assert writes == [{"force": False, "args": ["out.txt"], "text": "body"}]
    assert quits == [{"force": False, "dirty": False}]


def test_edit_force_event() -> None:
    context = make_context()
    edits: List[Dict[str, object]] = []
    context.bus.subscribe("command.edit", lambda payload: edits.append(payload))

    submit_command_line(context, "e! notes.txt")

    assert edits == [{"force": True, "args": ["notes.txt"]}]


def test_unknown_and_empty_commands() -> None:
    context = make_context()
    errors: List[object] = []
    context.bus.subscribe("command.error", lambda payload: errors.append(payload))

    assert submit_command_line(context, "   ").status == "command_empty"
    assert submit_command_line(context, "frobnicate").status == "command_error"
    assert errors == ["frobnicate"]


def test_command_history_is_kept() -> None:
    context = make_context("abc")

    submit_command_line(context, "find b")
    submit_command_line(context, "spell")

    state = context.extras["command_state"]
    assert isinstance(state, dict)
    assert state["history"] == ["find b", "spell"]


def test_command_names_cover_editor_verbs() -> None:
    names = command_names()

    for verb in ("find", "replace", "spell", "undo", "redo", "new", "edit", "write"):
        assert verb in names
