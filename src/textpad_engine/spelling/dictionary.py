"""Word list backing the spell checker."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, Optional

from textpad_engine.runtime import telemetry


@dataclass(frozen=True, slots=True)
class Dictionary:
    """Immutable set of lowercase known words.

    An empty dictionary is valid and means spell checking is unavailable.
    """

    words: FrozenSet[str] = field(default_factory=frozenset)
    source: Optional[str] = None

    @classmethod
    def from_words(
        cls, words: Iterable[str], *, source: Optional[str] = None
    ) -> "Dictionary":
        cleaned = (word.strip().lower() for word in words)
        return cls(words=frozenset(word for word in cleaned if word), source=source)

    @property
    def available(self) -> bool:
        return bool(self.words)

    def __contains__(self, word: object) -> bool:
        return word in self.words

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.words))


def load_dictionary(path: str | Path, *, encoding: str = "utf-8") -> Dictionary:
    """Read a newline-delimited word list.

    A missing or unreadable file leaves spell checking disabled instead of
    failing startup.
    """

    location = Path(path)
    with telemetry.span(
        "spelling::load_dictionary",
        component="spelling",
        metadata={"path": str(location)},
    ) as handle:
        try:
            with location.open("r", encoding=encoding) as stream:
                dictionary = Dictionary.from_words(stream, source=str(location))
        except (OSError, UnicodeDecodeError) as exc:
            handle.add_metadata("error", exc)
            telemetry.record_event(
                "spelling.dictionary_unavailable",
                level="warning",
                data={"path": str(location), "reason": str(exc)},
            )
            return Dictionary(source=str(location))
        handle.add_metadata("words", len(dictionary))
        return dictionary


__all__ = ["Dictionary", "load_dictionary"]
