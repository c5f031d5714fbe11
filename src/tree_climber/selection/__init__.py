"""Selection model: selection shapes, equality, history, and errors."""

from .errors import ClimbInvariantError, IterationLimitError
from .history import SelectionHistory
from .model import (
    NodeRangeSelection,
    Selection,
    Span,
    SubNodeSelection,
    equal_selections,
    make_node_range_selection,
    make_sub_node_selection,
    same_parent,
)

__all__ = [
    "ClimbInvariantError",
    "IterationLimitError",
    "NodeRangeSelection",
    "Selection",
    "SelectionHistory",
    "Span",
    "SubNodeSelection",
    "equal_selections",
    "make_node_range_selection",
    "make_sub_node_selection",
    "same_parent",
]
