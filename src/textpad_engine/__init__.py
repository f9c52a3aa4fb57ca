"""UI-agnostic plain-text editing engine."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "runtime",
    "search",
    "spelling",
]

__version__ = "0.1.0"
