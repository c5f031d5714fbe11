"""Structural node wrapper over tree-sitter nodes."""

from __future__ import annotations

from functools import total_ordering
from typing import Optional, Tuple

from tree_sitter import Node

Point = Tuple[int, int]  # (row, byte column)


@total_ordering
class SyntaxNode:
    """Read-only view of a tree-sitter node with structural equality.

    Two ``SyntaxNode`` objects are equal when they carry the same type tag
    and the same byte range, no matter which accessor produced them.
    Ordering follows document order: start byte first, then end byte.
    """

    __slots__ = ("_node",)

    def __init__(self, node: Node) -> None:
        self._node = node

    @property
    def raw(self) -> Node:
        return self._node

    @property
    def type(self) -> str:
        return self._node.type

    @property
    def is_named(self) -> bool:
        return self._node.is_named

    @property
    def is_extra(self) -> bool:
        """Comments and other tokens the grammar allows anywhere."""

        return self._node.is_extra

    @property
    def start_byte(self) -> int:
        return self._node.start_byte

    @property
    def end_byte(self) -> int:
        return self._node.end_byte

    @property
    def start_point(self) -> Point:
        point = self._node.start_point
        return (point[0], point[1])

    @property
    def end_point(self) -> Point:
        point = self._node.end_point
        return (point[0], point[1])

    @property
    def key(self) -> Tuple[str, int, int]:
        return (self.type, self.start_byte, self.end_byte)

    @property
    def parent(self) -> Optional["SyntaxNode"]:
        return _wrap(self._node.parent)

    @property
    def children(self) -> Tuple["SyntaxNode", ...]:
        return tuple(SyntaxNode(child) for child in self._node.children)

    @property
    def child_count(self) -> int:
        return self._node.child_count

    def child(self, index: int) -> Optional["SyntaxNode"]:
        if index < 0:
            index += self._node.child_count
        if index < 0 or index >= self._node.child_count:
            return None
        return _wrap(self._node.child(index))

    @property
    def prev_sibling(self) -> Optional["SyntaxNode"]:
        return _wrap(self._node.prev_sibling)

    @property
    def next_sibling(self) -> Optional["SyntaxNode"]:
        return _wrap(self._node.next_sibling)

    @property
    def text(self) -> bytes:
        return self._node.text or b""

    def descendant_for_range(self, start: Point, end: Point) -> Optional["SyntaxNode"]:
        return _wrap(self._node.descendant_for_point_range(start, end))

    def named_descendant_for_range(
        self, start: Point, end: Point
    ) -> Optional["SyntaxNode"]:
        return _wrap(self._node.named_descendant_for_point_range(start, end))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyntaxNode):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: "SyntaxNode") -> bool:
        if not isinstance(other, SyntaxNode):
            return NotImplemented
        return (self.start_byte, self.end_byte) < (other.start_byte, other.end_byte)

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        (sr, sc), (er, ec) = self.start_point, self.end_point
        return f"<SyntaxNode {self.type} [{sr}:{sc} - {er}:{ec}]>"


def _wrap(node: Optional[Node]) -> Optional[SyntaxNode]:
    if node is None:
        return None
    return SyntaxNode(node)


def node_types(nodes) -> Tuple[str, ...]:
    return tuple(node.type for node in nodes)


__all__ = ["Point", "SyntaxNode", "node_types"]
