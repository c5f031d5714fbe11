"""Tree-climbing engine: rule table, grammar profiles, driver, and seeding."""

from .engine import TreeClimber, climb, shared_parent
from .grammars import (
    RUST,
    RUST_RULES,
    GrammarProfile,
    available_profiles,
    get_profile,
    register_profile,
)
from .rules import (
    BraceBlock,
    DelimitedList,
    Fallback,
    RuleTable,
    Strategy,
    inner_bounds,
    inner_children,
)
from .seeding import literal_under_cursor, seed_selection

__all__ = [
    "BraceBlock",
    "DelimitedList",
    "Fallback",
    "GrammarProfile",
    "RUST",
    "RUST_RULES",
    "RuleTable",
    "Strategy",
    "TreeClimber",
    "available_profiles",
    "climb",
    "get_profile",
    "inner_bounds",
    "inner_children",
    "literal_under_cursor",
    "register_profile",
    "seed_selection",
    "shared_parent",
]
