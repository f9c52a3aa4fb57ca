"""Find and replace over buffer snapshots."""

from .engine import InvalidQuery, MatchSet, count_replacements, find_all, replace_all

__all__ = [
    "InvalidQuery",
    "MatchSet",
    "find_all",
    "replace_all",
    "count_replacements",
]
