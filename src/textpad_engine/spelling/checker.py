"""Dictionary-based spell checking over text snapshots."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .dictionary import Dictionary

# Runs touching digits, underscores or non-ASCII letters have no word
# boundary on that side, so "abc123" and "café" produce no token.
WORD_PATTERN = re.compile(r"\b[a-zA-Z]+\b")

STATUS_UNAVAILABLE = "unavailable"
STATUS_OK = "ok"
STATUS_MISSPELLED = "misspelled"


@dataclass(frozen=True, slots=True)
class SpellCheckResult:
    status: str
    misspelled: Tuple[str, ...] = ()

    @classmethod
    def unavailable(cls) -> "SpellCheckResult":
        return cls(status=STATUS_UNAVAILABLE)

    @property
    def available(self) -> bool:
        return self.status != STATUS_UNAVAILABLE

    @property
    def clean(self) -> bool:
        return self.status == STATUS_OK

    def __iter__(self) -> Iterator[str]:
        return iter(self.misspelled)

    def __len__(self) -> int:
        return len(self.misspelled)


def tokenize(content: str) -> Iterator[str]:
    """Yield lowercase ASCII-letter tokens in document order."""

    for match in WORD_PATTERN.finditer(content):
        yield match.group().lower()


def check(content: str, dictionary: Optional[Dictionary]) -> SpellCheckResult:
    if dictionary is None or not dictionary.available:
        return SpellCheckResult.unavailable()

    unknown = {token for token in tokenize(content) if token not in dictionary}
    if not unknown:
        return SpellCheckResult(status=STATUS_OK)
    return SpellCheckResult(status=STATUS_MISSPELLED, misspelled=tuple(sorted(unknown)))


__all__ = [
    "SpellCheckResult",
    "WORD_PATTERN",
    "check",
    "tokenize",
]
