"""Literal substring search and replace over text snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


class InvalidQuery(ValueError):
    """Raised when a search or replace is asked for with an empty pattern."""

    def __init__(self, message: str = "search term cannot be empty") -> None:
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class MatchSet:
    """Start offsets of ``term`` in ascending scan order."""

    term: str
    offsets: Tuple[int, ...] = ()

    def __iter__(self) -> Iterator[int]:
        return iter(self.offsets)

    def __len__(self) -> int:
        return len(self.offsets)

    def __bool__(self) -> bool:
        return bool(self.offsets)

    @property
    def first(self) -> Optional[int]:
        return self.offsets[0] if self.offsets else None

    def spans(self) -> Iterator[Tuple[int, int]]:
        width = len(self.term)
        for start in self.offsets:
            yield (start, start + width)


def _require_pattern(pattern: str) -> None:
    if not pattern:
        raise InvalidQuery()


def find_all(content: str, term: str) -> MatchSet:
    """Return every offset where ``term`` starts in ``content``.

    Each scan resumes one character past the previous match's start, so
    overlapping occurrences are all reported: ``"aa"`` in ``"aaa"`` gives
    ``(0, 1)``.
    """

    _require_pattern(term)
    offsets: List[int] = []
    index = content.find(term)
    while index >= 0:
        offsets.append(index)
        index = content.find(term, index + 1)
    return MatchSet(term=term, offsets=tuple(offsets))


def replace_all(content: str, find: str, replace: str) -> str:
    """Replace non-overlapping occurrences of ``find``, scanning left to right.

    Replaced text is never re-scanned. The result is not committed anywhere.
    """

    _require_pattern(find)
    return content.replace(find, replace)


def count_replacements(content: str, find: str) -> int:
    """Number of substitutions ``replace_all`` would make."""

    _require_pattern(find)
    return content.count(find)


__all__ = [
    "InvalidQuery",
    "MatchSet",
    "find_all",
    "replace_all",
    "count_replacements",
]
