"""Tree-climbing driver: computes the next, strictly larger selection."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from tree_climber.runtime import telemetry
from tree_climber.runtime.config import DEFAULT_MAX_ITERATIONS
from tree_climber.selection import (
    ClimbInvariantError,
    IterationLimitError,
    NodeRangeSelection,
    Selection,
    SubNodeSelection,
    equal_selections,
    make_node_range_selection,
    same_parent,
)
from tree_climber.syntax import SyntaxNode, node_types

from .grammars import RUST_RULES
from .rules import Nodes, RuleTable


def shared_parent(nodes: Sequence[SyntaxNode]) -> Optional[SyntaxNode]:
    """Return the parent every node in ``nodes`` hangs off.

    ``None`` only when the nodes are the tree root.
    """

    if not nodes:
        raise ClimbInvariantError(
            "cannot climb from an empty selection", invariant="non_empty_selection"
        )
    if not same_parent(nodes):
        raise ClimbInvariantError(
            "not all nodes share the same parent",
            invariant="shared_parent",
            nodes=node_types(nodes),
        )
    return nodes[0].parent


def climb(
    current: Sequence[SyntaxNode],
    parent: SyntaxNode,
    rules: RuleTable = RUST_RULES,
) -> Nodes:
    """Compute the sibling run to select after ``current`` under ``parent``.

    The result may denote the same text as ``current``; callers decide
    whether that counts as progress.
    """

    if not current:
        raise ClimbInvariantError(
            "cannot climb from an empty selection", invariant="non_empty_selection"
        )
    strategy = rules.strategy_for(parent.type)
    result = tuple(strategy.expand(tuple(current), parent))
    if not result:
        raise ClimbInvariantError(
            f"{type(strategy).__name__} produced an empty selection",
            invariant="non_empty_result",
            nodes=(parent.type,),
        )
    return result


class TreeClimber:
    """Applies the rule table repeatedly until the selected span grows."""

    def __init__(
        self,
        rules: RuleTable = RUST_RULES,
        *,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        logger_name: str | None = None,
    ) -> None:
        if max_iterations <= 0:
            raise ValueError("max_iterations must be positive")
        self.rules = rules
        self.max_iterations = max_iterations
        self.logger = telemetry.get_logger(logger_name or "tree_climber.climbing")

    def grow(self, selection: Selection, root: SyntaxNode) -> Optional[Selection]:
        """Return the next selection, or ``None`` when the whole tree is selected.

        A sub-node selection is promoted to its anchor token without
        consulting the rule table.
        """

        if isinstance(selection, SubNodeSelection):
            return make_node_range_selection((selection.anchor,))
        return self._grow_nodes(selection, root)

    def _grow_nodes(
        self, selection: NodeRangeSelection, root: SyntaxNode
    ) -> Optional[NodeRangeSelection]:
        reached: NodeRangeSelection = selection
        visited: List[Tuple[str, ...]] = []

        for _ in range(self.max_iterations):
            parent = self._parent_of(reached.nodes, root)
            if parent is None:
                return None

            following = climb(reached.nodes, parent, self.rules)
            visited.append(node_types(following))
            self.logger.debug(
                f"climb parent={parent.type} "
                f"current={node_types(reached.nodes)} next={node_types(following)}"
            )

            candidate = make_node_range_selection(following)
            if not equal_selections(candidate, reached):
                return candidate
            reached = candidate

        raise IterationLimitError(self.max_iterations, visited)

    @staticmethod
    def _parent_of(current: Nodes, root: SyntaxNode) -> Optional[SyntaxNode]:
        node = current[0]
        parent = shared_parent(current)
        if parent is not None:
            return parent
        if node == root:
            return None
        # Detached from the tree handed in: fall back to the smallest node
        # in the fresh tree that encloses it.
        enclosing = root.descendant_for_range(node.start_point, node.end_point)
        if enclosing is None or enclosing == node:
            return None
        return enclosing


__all__ = ["TreeClimber", "climb", "shared_parent"]
