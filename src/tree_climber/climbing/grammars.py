"""Grammar profiles: the per-language data the engine is parameterised by."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet

from .rules import BraceBlock, DelimitedList, RuleTable


@dataclass(frozen=True)
class GrammarProfile:
    """Rule table plus the literal node types used when seeding a selection."""

    name: str
    rules: RuleTable
    string_literals: FrozenSet[str] = frozenset()
    char_literals: FrozenSet[str] = frozenset()
    raw_string_literals: FrozenSet[str] = frozenset()
    literal_contents: FrozenSet[str] = frozenset()

    @property
    def literal_types(self) -> FrozenSet[str]:
        return self.string_literals | self.char_literals | self.raw_string_literals


PARENS = DelimitedList("(", ")")
BRACKETS = DelimitedList("[", "]")
ANGLES = DelimitedList("<", ">")
BRACES = DelimitedList("{", "}")
TUPLE = DelimitedList("(", ")", single_element=False)

RUST_RULES = RuleTable(
    rules={
        "tuple_expression": TUPLE,
        "tuple_type": PARENS,
        "tuple_pattern": PARENS,
        "arguments": PARENS,
        "type_arguments": ANGLES,
        "array_expression": BRACKETS,
        "parameters": PARENS,
        "field_initializer_list": BRACES,
        "field_declaration_list": BRACES,
        "type_parameters": ANGLES,
        "ordered_field_declaration_list": PARENS,
        "enum_variant_list": BRACES,
        "use_list": BRACES,
        "closure_parameters": DelimitedList("|", "|"),
        "slice_pattern": BRACKETS,
        "tuple_struct_pattern": PARENS,
        "block": BraceBlock(),
        "match_block": BraceBlock(),
        "declaration_list": BraceBlock(),
    }
)

RUST = GrammarProfile(
    name="rust",
    rules=RUST_RULES,
    string_literals=frozenset({"string_literal"}),
    char_literals=frozenset({"char_literal"}),
    raw_string_literals=frozenset({"raw_string_literal"}),
    literal_contents=frozenset({"string_content", "escape_sequence"}),
)

_PROFILES: Dict[str, GrammarProfile] = {RUST.name: RUST}


def available_profiles() -> FrozenSet[str]:
    return frozenset(_PROFILES)


def get_profile(name: str) -> GrammarProfile:
    try:
        return _PROFILES[name.lower()]
    except KeyError as exc:
        raise KeyError(f"No grammar profile registered for '{name}'") from exc


def register_profile(profile: GrammarProfile, *, replace: bool = False) -> GrammarProfile:
    if not replace and profile.name in _PROFILES:
        raise ValueError(f"Grammar profile '{profile.name}' already registered")
    _PROFILES[profile.name] = profile
    return profile


__all__ = [
    "GrammarProfile",
    "RUST",
    "RUST_RULES",
    "available_profiles",
    "get_profile",
    "register_profile",
]
