"""Selection sessions: the host-facing begin / grow / shrink surface."""

from .registry import (
    SelectionResult,
    SelectionSession,
    SelectionSessions,
    SessionNotFoundError,
)
from .view import BufferEditorView, EditorView

__all__ = [
    "BufferEditorView",
    "EditorView",
    "SelectionResult",
    "SelectionSession",
    "SelectionSessions",
    "SessionNotFoundError",
]
