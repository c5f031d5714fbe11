"""Tree-sitter backed parser service for Rust documents."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional, Tuple

import tree_sitter_rust
from tree_sitter import Language, Parser, Tree

from tree_climber.runtime import telemetry

from .document import Position, SourceDocument
from .nodes import Point, SyntaxNode

EditorSpan = Tuple[int, int, int, int]  # start_row, start_col, end_row, end_col


class DocumentNotFoundError(KeyError):
    """Raised when a document id has not been opened with the parser service."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document '{document_id}' is not open")
        self.document_id = document_id


@lru_cache(maxsize=1)
def rust_language() -> Language:
    return Language(tree_sitter_rust.language())


@dataclass(slots=True)
class _ParsedDocument:
    document: SourceDocument
    tree: Optional[Tree] = None
    tree_version: int = -1


class RustParserService:
    """Owns open documents and hands out parsed syntax trees.

    Trees are cached per document version; editing a document through
    ``update_document`` invalidates its cached tree.
    """

    language_name = "rust"

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._parser = Parser(rust_language())
        self._documents: Dict[str, _ParsedDocument] = {}
        self.logger = telemetry.get_logger(logger_name or "tree_climber.syntax")

    def open_document(self, document_id: str, text: str) -> SourceDocument:
        document = SourceDocument.from_text(text)
        self._documents[document_id] = _ParsedDocument(document=document)
        return document

    def update_document(self, document_id: str, text: str) -> SourceDocument:
        entry = self._entry(document_id)
        entry.document = entry.document.replace(text)
        return entry.document

    def close_document(self, document_id: str) -> None:
        self._documents.pop(document_id, None)

    def document(self, document_id: str) -> SourceDocument:
        return self._entry(document_id).document

    def tree_for_document(self, document_id: str) -> SyntaxNode:
        """Return the root node of the (possibly cached) tree for a document."""

        entry = self._entry(document_id)
        if entry.tree is None or entry.tree_version != entry.document.version:
            with telemetry.span(
                "syntax::parse",
                component="syntax",
                metadata={
                    "document": document_id,
                    "version": entry.document.version,
                },
            ):
                entry.tree = self._parser.parse(entry.document.encoded)
                entry.tree_version = entry.document.version
        return SyntaxNode(entry.tree.root_node)

    def node_at(
        self, document_id: str, row: int, column: int
    ) -> Optional[SyntaxNode]:
        """Return the smallest named node covering an editor position."""

        document = self.document(document_id)
        root = self.tree_for_document(document_id)
        if root.child_count == 0:
            return None
        point = (row, document.byte_column(row, column))
        return root.named_descendant_for_range(point, point)

    def editor_position(self, document_id: str, point: Point) -> Position:
        row, byte_column = point
        return (row, self.document(document_id).char_column(row, byte_column))

    def editor_span(self, document_id: str, start: Point, end: Point) -> EditorSpan:
        start_row, start_col = self.editor_position(document_id, start)
        end_row, end_col = self.editor_position(document_id, end)
        return (start_row, start_col, end_row, end_col)

    @staticmethod
    def text_of(node: SyntaxNode) -> str:
        return node.text.decode("utf-8")

    def _entry(self, document_id: str) -> _ParsedDocument:
        try:
            return self._documents[document_id]
        except KeyError as exc:
            raise DocumentNotFoundError(document_id) from exc


__all__ = [
    "DocumentNotFoundError",
    "EditorSpan",
    "RustParserService",
    "rust_language",
]
