"""Selection shapes produced and consumed by the climbing engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from tree_climber.syntax import Point, SyntaxNode, node_types

from .errors import ClimbInvariantError

Span = Tuple[Point, Point]


@dataclass(frozen=True, slots=True)
class NodeRangeSelection:
    """Contiguous run of sibling nodes sharing one parent."""

    nodes: Tuple[SyntaxNode, ...]

    def __post_init__(self) -> None:
        nodes = tuple(self.nodes)
        if not nodes:
            raise ClimbInvariantError(
                "node-range selection requires at least one node",
                invariant="non_empty_selection",
            )
        if not same_parent(nodes):
            raise ClimbInvariantError(
                "not all nodes share the same parent",
                invariant="shared_parent",
                nodes=node_types(nodes),
            )
        if nodes[0].start_byte > nodes[-1].start_byte:
            raise ClimbInvariantError(
                "leftmost node starts after the rightmost node",
                invariant="document_order",
                nodes=node_types(nodes),
            )
        object.__setattr__(self, "nodes", nodes)

    @property
    def leftmost(self) -> SyntaxNode:
        return self.nodes[0]

    @property
    def rightmost(self) -> SyntaxNode:
        return self.nodes[-1]

    @property
    def span(self) -> Span:
        return (self.leftmost.start_point, self.rightmost.end_point)


@dataclass(frozen=True, slots=True)
class SubNodeSelection:
    """Range strictly inside one token, e.g. the contents of a string literal."""

    anchor: SyntaxNode
    start: Point
    end: Point

    def __post_init__(self) -> None:
        if not (self.anchor.start_point <= self.start <= self.end <= self.anchor.end_point):
            raise ClimbInvariantError(
                f"sub-range {self.start}-{self.end} escapes its anchor",
                invariant="sub_node_within_anchor",
                nodes=(self.anchor.type,),
            )

    @property
    def span(self) -> Span:
        return (self.start, self.end)


Selection = Union[NodeRangeSelection, SubNodeSelection]


def make_node_range_selection(nodes: Iterable[SyntaxNode]) -> NodeRangeSelection:
    return NodeRangeSelection(tuple(nodes))


def make_sub_node_selection(
    anchor: SyntaxNode, start: Point, end: Point
) -> SubNodeSelection:
    return SubNodeSelection(anchor=anchor, start=start, end=end)


def equal_selections(left: Selection, right: Selection) -> bool:
    """Compare two selections by the document span they cover.

    Distinct node sets may denote the same text (a wrapper node and its only
    child, say), so node identity is ignored.
    """

    return left.span == right.span


def same_parent(nodes: Iterable[SyntaxNode]) -> bool:
    iterator = iter(nodes)
    first = next(iterator, None)
    if first is None:
        return True
    representative = first.parent
    for node in iterator:
        if node.parent != representative:
            return False
    return True


__all__ = [
    "NodeRangeSelection",
    "Selection",
    "Span",
    "SubNodeSelection",
    "equal_selections",
    "make_node_range_selection",
    "make_sub_node_selection",
    "same_parent",
]
