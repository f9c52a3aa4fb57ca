"""telelog wiring for textpad_engine.

Engine code logs through ``record_event`` and ``span``. ``configure`` is
called once at import from the ``TEXTPAD_ENGINE_*`` environment and again by
the app when ``--log-preset`` is given.
"""

from __future__ import annotations

import os
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TEXTPAD_ENGINE_"
LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "textpad_engine")

_state: Dict[str, Any] = {"config": None, "logger": None}


def _env(name: str) -> str:
    return os.environ.get(f"{ENV_PREFIX}{name}", "").strip()


def _env_flag(name: str) -> bool:
    return _env(name).lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set, frozenset)):
        return repr(value)
    return str(value)


def _with_profiling(config: Any) -> Any:
    # Spans rely on logger.profile, which is inert without profiling.
    config.with_profiling(True)
    return config


def _editor_session_config() -> Any:
    # Interactive debugging: everything to a colored console.
    config = tl.Config()
    config.with_min_level("DEBUG")
    config.with_console_output(True)
    config.with_colored_output(True)
    return config


def _quiet_file_config() -> Any:
    # The TUI owns the terminal, so nothing may reach the console.
    config = tl.Config()
    config.with_min_level("INFO")
    config.with_console_output(False)
    config.with_file_output(_env("LOG_FILE") or "textpad_engine.log")
    return config


_PRESET_BUILDERS = {
    "development": _editor_session_config,
    "production": _quiet_file_config,
}
PRESETS = tuple(_PRESET_BUILDERS)


def _preset_config(preset: str) -> Any:
    builder = _PRESET_BUILDERS.get(preset.strip().lower())
    if builder is None:
        raise ValueError(f"Unknown preset '{preset}'; expected one of {PRESETS}.")
    return builder()


def _environment_config() -> Any:
    """Build a config from ``TEXTPAD_ENGINE_LOG_*`` and friends.

    Defaults to WARNING on a colored console so an unconfigured editor stays
    quiet.
    """

    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "WARNING").upper())
    console = not _env_flag("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    config.with_json_format(_env_flag("LOG_JSON"))
    if _env("LOG_FILE"):
        config.with_file_output(_env("LOG_FILE"))
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the telelog config used by every engine module.

    ``preset`` is one of ``PRESETS``; ``config`` is a ready ``telelog.Config``.
    With neither, the environment is read again.
    """

    if config is not None and preset:
        raise ValueError("configure() takes `config` or `preset`, not both.")
    if preset:
        config = _preset_config(preset)
    elif config is None:
        config = _environment_config()
    _state["config"] = _with_profiling(config)
    _state["logger"] = None


def get_logger() -> Any:
    if _state["logger"] is None:
        if _state["config"] is None:
            configure()
        _state["logger"] = tl.Logger.with_config(LOGGER_NAME, _state["config"])
    return _state["logger"]


def _log(level: str, message: str, data: Dict[str, Any]) -> None:
    log = get_logger()
    pairs = [(str(key), _text(value)) for key, value in data.items()]
    structured = getattr(log, f"{level.lower()}_with", None)
    if structured is not None:
        structured(message, pairs)
        return
    plain = getattr(log, level.lower(), None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(pairs)}")


def record_event(
    name: str, *, level: str = "info", data: Optional[Dict[str, Any]] = None
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    _log(level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Collects facts about a running span; they are logged when it ends."""

    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def summary(self, **extra: Any) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"span": self.name, **self.metadata, **extra}
        if self.component:
            fields["component"] = self.component
        return fields


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block of engine work under ``name``.

    ``component`` also tracks the block as a telelog component. The handle's
    metadata is logged at debug level on success; an exception is logged at
    error level with its reason and then re-raised.
    """

    log = get_logger()
    handle = SpanHandle(name, component)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    tracking = log.track_component(component) if component else nullcontext()
    with tracking, log.profile(name):
        try:
            yield handle
        except Exception as exc:
            _log("error", "span::fail", handle.summary(reason=exc))
            raise
    _log("debug", "span::done", handle.summary())


configure()

__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
