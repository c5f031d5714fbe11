"""Editor view boundary used by selection sessions."""

from __future__ import annotations

from typing import Optional, Protocol

from tree_climber.syntax import EditorSpan, Position, RustParserService, SyntaxNode


class EditorView(Protocol):
    """What a host editor must provide for a selection session."""

    @property
    def document_id(self) -> str:
        """Identifier the parser service knows the viewed document by."""
        ...

    def node_at_cursor(self) -> Optional[SyntaxNode]:
        """Return the node under the cursor, or ``None`` if there is nothing to select."""
        ...

    def set_selection(
        self, start_row: int, start_col: int, end_row: int, end_col: int
    ) -> None:
        """Show a selection; columns count characters, the end is exclusive."""
        ...


class BufferEditorView:
    """In-memory editor view: a cursor plus the last rendered selection."""

    def __init__(
        self,
        parser: RustParserService,
        document_id: str,
        *,
        cursor: Position = (0, 0),
    ) -> None:
        self._parser = parser
        self._document_id = document_id
        self.cursor: Position = cursor
        self.selection: Optional[EditorSpan] = None

    @property
    def document_id(self) -> str:
        return self._document_id

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = self._parser.document(self._document_id).ensure_position(
            (row, col)
        )

    def node_at_cursor(self) -> Optional[SyntaxNode]:
        row, col = self.cursor
        return self._parser.node_at(self._document_id, row, col)

    def set_selection(
        self, start_row: int, start_col: int, end_row: int, end_col: int
    ) -> None:
        self.selection = (start_row, start_col, end_row, end_col)

    def selected_text(self) -> str:
        if self.selection is None:
            return ""
        start_row, start_col, end_row, end_col = self.selection
        lines = self._parser.document(self._document_id).snapshot()
        if start_row == end_row:
            return lines[start_row][start_col:end_col]
        parts = [lines[start_row][start_col:]]
        parts.extend(lines[start_row + 1 : end_row])
        parts.append(lines[end_row][:end_col])
        return "\n".join(parts)


__all__ = ["BufferEditorView", "EditorView"]
