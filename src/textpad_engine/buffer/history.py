"""Snapshot-based undo/redo history."""

from __future__ import annotations

from typing import List, Tuple

from textpad_engine.runtime import telemetry


class HistoryManager:
    """Two snapshot stacks, ``past`` and ``future``, most recent last.

    ``past`` always holds at least one snapshot: the floor entry that undo
    cannot go below. Boundary undo/redo calls are no-ops returning the
    current content.
    """

    def __init__(self, initial: str = "") -> None:
        self._past: List[str] = [initial]
        self._future: List[str] = []

    @property
    def past(self) -> Tuple[str, ...]:
        return tuple(self._past)

    @property
    def future(self) -> Tuple[str, ...]:
        return tuple(self._future)

    @property
    def current(self) -> str:
        return self._past[-1]

    @property
    def depth(self) -> int:
        return len(self._past) - 1

    def can_undo(self) -> bool:
        return len(self._past) > 1

    def can_redo(self) -> bool:
        return bool(self._future)

    def record_if_changed(self, new_content: str) -> bool:
        """Push ``new_content`` unless it equals the current snapshot.

        Returns ``True`` when a snapshot was recorded. Recording drops the
        redo branch.
        """

        if new_content == self._past[-1]:
            return False
        self._past.append(new_content)
        self._future.clear()
        self._record("history.record")
        return True

    def undo(self) -> str:
        if not self.can_undo():
            return self.current
        self._future.append(self._past.pop())
        self._record("history.undo")
        return self._past[-1]

    def redo(self) -> str:
        if not self._future:
            return self.current
        restored = self._future.pop()
        self._past.append(restored)
        self._record("history.redo")
        return restored

    def reset(self, initial: str = "") -> None:
        self._past = [initial]
        self._future = []
        self._record("history.reset")

    def _record(self, event: str) -> None:
        telemetry.record_event(
            event,
            level="debug",
            data={"past": len(self._past), "future": len(self._future)},
        )


__all__ = ["HistoryManager"]
