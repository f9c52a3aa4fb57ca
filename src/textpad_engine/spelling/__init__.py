"""Dictionary loading and spell checking."""

from .checker import SpellCheckResult, check, tokenize
from .dictionary import Dictionary, load_dictionary

__all__ = [
    "Dictionary",
    "SpellCheckResult",
    "check",
    "load_dictionary",
    "tokenize",
]
