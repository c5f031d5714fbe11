"""Source text storage shared by the parser service and editor views."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

Position = Tuple[int, int]  # (row, character column)


class PositionError(ValueError):
    """Raised when a row/column pair falls outside the document."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


@dataclass(slots=True)
class SourceDocument:
    """Immutable-ish text storage built on a list-of-lines model.

    Tree-sitter reports columns in UTF-8 bytes while editors count
    characters; the document owns the translation between the two.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str, *, version: int = 0) -> "SourceDocument":
        lines = text.split("\n")
        return cls(_lines=lines, version=version)

    def replace(self, text: str) -> "SourceDocument":
        """Return a new document holding ``text`` with a bumped version."""

        return SourceDocument.from_text(text, version=self.version + 1)

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def encoded(self) -> bytes:
        return self.text.encode("utf-8")

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def ensure_position(self, position: Position) -> Position:
        row, col = position
        if row < 0 or row >= self.line_count:
            raise PositionError("Row out of range", position=position)
        if col < 0 or col > len(self._lines[row]):
            raise PositionError("Column out of range", position=position)
        return position

    def byte_column(self, row: int, column: int) -> int:
        """Translate a character column on ``row`` into a byte column."""

        self.ensure_position((row, column))
        return len(self._lines[row][:column].encode("utf-8"))

    def char_column(self, row: int, byte_column: int) -> int:
        """Translate a byte column on ``row`` into a character column."""

        if row < 0 or row >= self.line_count:
            raise PositionError("Row out of range", position=(row, byte_column))
        encoded = self._lines[row].encode("utf-8")
        if byte_column < 0 or byte_column > len(encoded):
            raise PositionError("Column out of range", position=(row, byte_column))
        return len(encoded[:byte_column].decode("utf-8", errors="ignore"))


__all__ = ["Position", "PositionError", "SourceDocument"]
