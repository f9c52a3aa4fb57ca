"""Session configuration read from ``TEXTPAD_ENGINE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "TEXTPAD_ENGINE_"
DEFAULT_DICTIONARY = "dict.txt"
DEFAULT_ENCODING = "utf-8"


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Startup options for an editor session and its host."""

    dictionary_path: Optional[Path] = Path(DEFAULT_DICTIONARY)
    encoding: str = DEFAULT_ENCODING
    telemetry_preset: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        env = os.environ if environ is None else environ

        raw_dictionary = env.get(f"{ENV_PREFIX}DICTIONARY", DEFAULT_DICTIONARY)
        dictionary_path = Path(raw_dictionary) if raw_dictionary.strip() else None
        encoding = env.get(f"{ENV_PREFIX}ENCODING", "").strip() or DEFAULT_ENCODING
        preset = env.get(f"{ENV_PREFIX}PRESET", "").strip() or None

        return cls(
            dictionary_path=dictionary_path,
            encoding=encoding,
            telemetry_preset=preset,
        )

    def with_overrides(self, **changes: object) -> "EngineSettings":
        """Return a copy with every non-``None`` override applied."""

        applied = {key: value for key, value in changes.items() if value is not None}
        if isinstance(applied.get("dictionary_path"), str):
            applied["dictionary_path"] = Path(str(applied["dictionary_path"]))
        return replace(self, **applied)


__all__ = ["EngineSettings", "ENV_PREFIX"]
