"""Shared types for editor actions: event bus, context and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from textpad_engine.buffer import EditorSession


@dataclass(slots=True)
class ActionResult:
    """Outcome of an action, reported to the host as plain data."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    payload: object | None = None


class EventBus:
    """Minimal publish/subscribe channel between actions and the host."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ActionContext:
    """Services every action can reach."""

    session: EditorSession
    bus: EventBus
    extras: Dict[str, object] = field(default_factory=dict)


__all__ = ["ActionContext", "ActionResult", "EventBus"]
