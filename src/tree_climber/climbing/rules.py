"""Expansion strategies keyed by the parent node's type tag.

Every strategy answers one question: given the currently selected sibling
nodes and their shared parent, which sibling run (or the parent itself)
should be selected next?  The closed set of strategies is:

``DelimitedList``
    Comma separated elements between an open and a close token, e.g. call
    arguments ``(a, b, c)`` or array literals ``[a, b, c]``.
``BraceBlock``
    Statements or match arms between braces.
``Fallback``
    Anything else; always selects the parent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Tuple, Union

from tree_climber.selection import ClimbInvariantError
from tree_climber.syntax import SyntaxNode, node_types

Nodes = Tuple[SyntaxNode, ...]

COMMA = ","


def inner_bounds(
    parent: SyntaxNode, open_token: str, close_token: str
) -> Optional[Tuple[int, int]]:
    """Return ``(first, last)`` child indices strictly between the delimiters.

    ``None`` when the delimiters are missing or enclose nothing.
    """

    types = [child.type for child in parent.children]
    try:
        open_index = types.index(open_token)
    except ValueError:
        return None
    close_index = max(
        (index for index, type_tag in enumerate(types) if type_tag == close_token),
        default=-1,
    )
    if close_index <= open_index + 1:
        return None
    return (open_index + 1, close_index - 1)


def inner_children(parent: SyntaxNode, open_token: str, close_token: str) -> Nodes:
    bounds = inner_bounds(parent, open_token, close_token)
    if bounds is None:
        return ()
    first, last = bounds
    return parent.children[first : last + 1]


@dataclass(frozen=True, slots=True)
class Fallback:
    """Select the parent unconditionally."""

    def expand(self, current: Nodes, parent: SyntaxNode) -> Nodes:
        del current
        return (parent,)


@dataclass(frozen=True, slots=True)
class BraceBlock:
    """Select every inner child first, then the whole block with its braces."""

    open_token: str = "{"
    close_token: str = "}"

    def expand(self, current: Nodes, parent: SyntaxNode) -> Nodes:
        inner = inner_children(parent, self.open_token, self.close_token)
        if not inner or not _within(current, inner):
            return (parent,)
        if current[0] == inner[0] and current[-1] == inner[-1]:
            return (parent,)
        return inner


@dataclass(frozen=True, slots=True)
class DelimitedList:
    """Comma separated elements between ``open_token`` and ``close_token``.

    ``single_element`` is ``False`` for constructs that can never hold
    exactly one element without a comma (tuples); meeting one is a
    precondition failure rather than a degenerate list.
    """

    open_token: str = "("
    close_token: str = ")"
    single_element: bool = True

    def expand(self, current: Nodes, parent: SyntaxNode) -> Nodes:
        inner = inner_children(parent, self.open_token, self.close_token)
        if not inner:
            return (parent,)

        significant = tuple(node for node in inner if not node.is_extra)
        if len(significant) == 1:
            if not self.single_element:
                raise ClimbInvariantError(
                    f"1-element {parent.type} should not exist",
                    invariant="no_single_element_tuple",
                    nodes=node_types(parent.children),
                )
            # Degenerate list: no comma to anchor on.
            return (parent,)

        if not _within(current, inner):
            return (parent,)

        if len(current) == 1:
            node = current[0]
            run = _run_to_comma(node, forward=node != significant[-1])
            return run or (parent,)

        if current[0] == inner[0] and current[-1] == inner[-1]:
            return (parent,)
        return inner


Strategy = Union[DelimitedList, BraceBlock, Fallback]

FALLBACK = Fallback()


@dataclass(frozen=True)
class RuleTable:
    """Lookup from parent type tag to expansion strategy."""

    rules: Mapping[str, Strategy] = field(default_factory=dict)
    default: Strategy = FALLBACK

    def strategy_for(self, type_tag: str) -> Strategy:
        return self.rules.get(type_tag, self.default)

    def extended(self, **rules: Strategy) -> "RuleTable":
        merged: Dict[str, Strategy] = dict(self.rules)
        merged.update(rules)
        return RuleTable(rules=merged, default=self.default)

    def __contains__(self, type_tag: object) -> bool:
        return type_tag in self.rules


def _within(current: Sequence[SyntaxNode], inner: Nodes) -> bool:
    return (
        inner[0].start_byte <= current[0].start_byte
        and current[-1].end_byte <= inner[-1].end_byte
    )


def _run_to_comma(node: SyntaxNode, *, forward: bool) -> Nodes:
    """Join ``node`` to the comma beside it, taking any comments in between.

    Empty when the neighbour past the comments is not a comma.
    """

    run = [node]
    sibling = node.next_sibling if forward else node.prev_sibling
    while sibling is not None and sibling.is_extra:
        run.append(sibling)
        sibling = sibling.next_sibling if forward else sibling.prev_sibling
    if sibling is None or sibling.type != COMMA:
        return ()
    run.append(sibling)
    return tuple(run) if forward else tuple(reversed(run))


__all__ = [
    "BraceBlock",
    "DelimitedList",
    "FALLBACK",
    "Fallback",
    "Nodes",
    "RuleTable",
    "Strategy",
    "inner_bounds",
    "inner_children",
]
