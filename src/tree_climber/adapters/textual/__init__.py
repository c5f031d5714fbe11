"""Textual host integration."""

from .controller import DEFAULT_KEYS, TextualSelectionAdapter, TextualUIHooks

__all__ = ["DEFAULT_KEYS", "TextualSelectionAdapter", "TextualUIHooks"]
