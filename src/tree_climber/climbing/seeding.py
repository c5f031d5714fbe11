"""Initial selection for a node under the cursor."""

from __future__ import annotations

import re

from tree_climber.selection import (
    Selection,
    make_node_range_selection,
    make_sub_node_selection,
)
from tree_climber.syntax import SyntaxNode

from .grammars import GrammarProfile

_RAW_STRING_OPENING = re.compile(rb'^[bc]?r(#*)"')


def literal_under_cursor(node: SyntaxNode, profile: GrammarProfile) -> SyntaxNode:
    """Promote literal content fragments to the literal that owns them."""

    if node.type in profile.literal_contents:
        parent = node.parent
        if parent is not None and parent.type in profile.literal_types:
            return parent
    return node


def seed_selection(node: SyntaxNode, profile: GrammarProfile) -> Selection:
    """Classify ``node`` and build the selection a new session starts from.

    Quoted literals start with their contents selected (quotes excluded);
    everything else starts as a one-node range.
    """

    node = literal_under_cursor(node, profile)
    type_tag = node.type

    if type_tag in profile.string_literals:
        return _string_interior(node)
    if type_tag in profile.char_literals:
        return _char_interior(node)
    if type_tag in profile.raw_string_literals:
        return _raw_string_interior(node)
    return make_node_range_selection((node,))


def _string_interior(node: SyntaxNode) -> Selection:
    opening = node.child(0)
    closing = node.child(-1)
    if opening is None or closing is None or opening == closing:
        return make_node_range_selection((node,))
    start, end = opening.end_point, closing.start_point
    if start >= end:
        return make_node_range_selection((node,))
    return make_sub_node_selection(node, start, end)


def _char_interior(node: SyntaxNode) -> Selection:
    text = node.text
    quote = text.find(b"'")
    if quote < 0 or len(text) - quote < 3:
        return make_node_range_selection((node,))
    row, column = node.start_point
    end_row, end_column = node.end_point
    return make_sub_node_selection(node, (row, column + quote + 1), (end_row, end_column - 1))


def _raw_string_interior(node: SyntaxNode) -> Selection:
    text = node.text
    match = _RAW_STRING_OPENING.match(text)
    if match is None:
        return make_node_range_selection((node,))
    prefix_len = match.end()
    suffix_len = len(match.group(1)) + 1
    if len(text) - prefix_len - suffix_len <= 0:
        return make_node_range_selection((node,))
    row, column = node.start_point
    end_row, end_column = node.end_point
    return make_sub_node_selection(
        node, (row, column + prefix_len), (end_row, end_column - suffix_len)
    )


__all__ = ["literal_under_cursor", "seed_selection"]
