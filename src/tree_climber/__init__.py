"""Syntax-aware selection expansion over tree-sitter trees."""

__all__ = [
    "adapters",
    "climbing",
    "runtime",
    "selection",
    "sessions",
    "syntax",
]

__version__ = "0.1.0"
