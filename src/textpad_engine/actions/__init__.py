"""Editor verbs invoked from command lines and key bindings."""

from .base import ActionContext, ActionResult, EventBus
from .command import (
    command_names,
    parse_replace,
    split_command,
    submit_command_line,
)

__all__ = [
    "ActionContext",
    "ActionResult",
    "EventBus",
    "command_names",
    "parse_replace",
    "split_command",
    "submit_command_line",
]
