from __future__ import annotations

from textpad_engine.buffer import HistoryManager


def make_history(*states: str, initial: str = "") -> HistoryManager:
    history = HistoryManager(initial)
    for state in states:
        history.record_if_changed(state)
    return history


def test_new_document_seeds_floor_entry() -> None:
    history = HistoryManager()

    assert history.past == ("",)
    assert history.future == ()
    assert history.can_undo() is False


def test_type_undo_redo_scenario() -> None:
    history = HistoryManager()

    history.record_if_changed("a")
    assert history.past == ("", "a")

    assert history.undo() == ""
    assert history.past == ("",)
    assert history.future == ("a",)

    assert history.redo() == "a"
    assert history.past == ("", "a")
    assert history.future == ()


def test_duplicate_state_is_recorded_once() -> None:
    history = HistoryManager()

    assert history.record_if_changed("x") is True
    assert history.record_if_changed("x") is False

    assert history.past == ("", "x")


def test_reverting_content_records_a_new_entry_but_repeat_does_not() -> None:
    history = make_history("ab")

    history.record_if_changed("abc")
    history.record_if_changed("ab")

    assert history.past == ("", "ab", "abc", "ab")
    assert history.record_if_changed("ab") is False


def test_undo_at_floor_is_noop() -> None:
    history = HistoryManager("seed")

    assert history.undo() == "seed"
    assert history.undo() == "seed"
    assert history.past == ("seed",)
    assert history.future == ()


def test_redo_with_empty_future_is_noop() -> None:
    history = make_history("one")

    assert history.redo() == "one"
    assert history.past == ("", "one")


def test_recording_after_undo_discards_redo_branch() -> None:
    history = make_history("one", "two")
    history.undo()
    assert history.can_redo() is True

    history.record_if_changed("branch")

    assert history.future == ()
    assert history.redo() == "branch"
    assert history.past == ("", "one", "branch")


def test_undo_k_then_redo_k_restores_content() -> None:
    states = ["a", "ab", "abc", "abcd"]
    for k in range(len(states) + 1):
        history = make_history(*states)
        before = history.current
        for _ in range(k):
            history.undo()
        for _ in range(k):
            result = history.redo()
        assert history.current == before
        if k:
            assert result == before


def test_reset_clears_both_stacks() -> None:
    history = make_history("one", "two")
    history.undo()

    history.reset("loaded")

    assert history.past == ("loaded",)
    assert history.future == ()
    assert history.depth == 0


def test_past_property_returns_copies() -> None:
    history = make_history("one")

    snapshot = history.past
    history.record_if_changed("two")

    assert snapshot == ("", "one")
