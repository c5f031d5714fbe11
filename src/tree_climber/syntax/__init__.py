"""Syntax tree access: node wrapper, documents, and the parser service."""

from .document import Position, PositionError, SourceDocument
from .nodes import Point, SyntaxNode, node_types
from .parser import DocumentNotFoundError, EditorSpan, RustParserService

__all__ = [
    "DocumentNotFoundError",
    "EditorSpan",
    "Point",
    "Position",
    "PositionError",
    "RustParserService",
    "SourceDocument",
    "SyntaxNode",
    "node_types",
]
