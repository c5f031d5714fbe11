from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import pytest

from tree_climber.climbing import RuleTable, TreeClimber
from tree_climber.runtime import ClimberConfig
from tree_climber.selection import IterationLimitError, NodeRangeSelection, SubNodeSelection
from tree_climber.sessions import (
    BufferEditorView,
    SelectionSessions,
    SessionNotFoundError,
)
from tree_climber.syntax import RustParserService

DOCUMENT = "main.rs"

PROGRAM = """struct Point { x: i32, y: i32 }

fn main() {
    let p = Point { x: 1, y: 2 };
    let v = vec![1, 2, 3];
    match p.x {
        0 => println!("zero"),
        _ => f(p.x, "s", 'c'),
    }
}
"""


def locate(source: str, needle: str, offset: int = 0) -> Tuple[int, int]:
    index = source.index(needle) + offset
    row = source.count("\n", 0, index)
    col = index - (source.rfind("\n", 0, index) + 1)
    return (row, col)


def make_session(
    source: str,
    needle: str,
    *,
    offset: int = 0,
    session_id: str = "s1",
    climber: TreeClimber | None = None,
) -> tuple[SelectionSessions, BufferEditorView]:
    parser = RustParserService()
    parser.open_document(DOCUMENT, source)
    view = BufferEditorView(parser, DOCUMENT, cursor=locate(source, needle, offset))
    sessions = SelectionSessions(parser, config=ClimberConfig(), climber=climber)
    sessions.open_session(session_id, view)
    return sessions, view


def grow_texts(sessions: SelectionSessions, view: BufferEditorView, count: int) -> List[str]:
    texts: List[str] = []
    for _ in range(count):
        result = sessions.grow_selection("s1")
        assert result.changed, result.status
        texts.append(view.selected_text())
    return texts


def test_list_middle_element_expansion() -> None:
    sessions, view = make_session(
        "fn main() { let t = (123, 321, 444); }", "321", offset=1
    )

    begin = sessions.begin_selection("s1")
    assert begin.status == "begin"
    assert view.selected_text() == "321"

    assert grow_texts(sessions, view, 3) == [
        "321,",
        "123, 321, 444",
        "(123, 321, 444)",
    ]


def test_single_argument_grows_straight_to_argument_list() -> None:
    sessions, view = make_session("fn main() { f(123); }", "123", offset=1)
    sessions.begin_selection("s1")

    assert grow_texts(sessions, view, 1) == ["(123)"]


def test_block_expansion() -> None:
    sessions, view = make_session("fn main() { 123; 321; 444 }", "321", offset=1)
    sessions.begin_selection("s1")

    assert grow_texts(sessions, view, 3) == [
        "321;",
        "123; 321; 444",
        "{ 123; 321; 444 }",
    ]


def test_string_literal_seeding() -> None:
    sessions, view = make_session('fn main() { f("hello", 1); }', "hello", offset=1)

    sessions.begin_selection("s1")
    (seed,) = sessions.history("s1")
    assert isinstance(seed, SubNodeSelection)
    assert view.selected_text() == "hello"

    assert grow_texts(sessions, view, 2) == ['"hello"', '"hello",']
    assert isinstance(sessions.history("s1")[1], NodeRangeSelection)


def test_escape_sequence_is_promoted_to_its_literal() -> None:
    sessions, view = make_session(r'fn main() { let s = "a\nb"; }', r"\n")

    sessions.begin_selection("s1")

    assert view.selected_text() == r"a\nb"


def test_empty_string_literal_selects_whole_token() -> None:
    sessions, view = make_session('fn main() { let s = ""; }', '""')

    sessions.begin_selection("s1")

    (seed,) = sessions.history("s1")
    assert isinstance(seed, NodeRangeSelection)
    assert view.selected_text() == '""'


def test_char_literal_seeding() -> None:
    sessions, view = make_session("fn main() { let c = 'x'; }", "x'")

    sessions.begin_selection("s1")
    assert view.selected_text() == "x"

    assert grow_texts(sessions, view, 1) == ["'x'"]


def test_raw_string_literal_seeding() -> None:
    sessions, view = make_session(
        'fn main() { let s = r#"raw"#; }', "raw", offset=1
    )

    sessions.begin_selection("s1")
    assert view.selected_text() == "raw"

    assert grow_texts(sessions, view, 1) == ['r#"raw"#']


def test_multiline_raw_string_interior() -> None:
    source = 'fn main() {\n    let s = r##"one\ntwo"##;\n}\n'
    sessions, view = make_session(source, "one", offset=1)

    sessions.begin_selection("s1")

    assert view.selected_text() == "one\ntwo"


def test_empty_raw_string_selects_whole_token() -> None:
    sessions, view = make_session('fn main() { let s = r#""#; }', 'r#""#')

    sessions.begin_selection("s1")

    assert isinstance(sessions.history("s1")[0], NodeRangeSelection)
    assert view.selected_text() == 'r#""#'


@pytest.mark.parametrize(
    ("literal", "interior"),
    [
        ('b"ab"', "ab"),
        ("b'x'", "x"),
        ('br#"raw"#', "raw"),
        ('br"plain"', "plain"),
    ],
)
def test_prefixed_literal_seeding(literal: str, interior: str) -> None:
    source = f"fn main() {{ let s = {literal}; }}"
    sessions, view = make_session(source, interior, offset=len(interior) // 2)

    sessions.begin_selection("s1")
    assert isinstance(sessions.history("s1")[0], SubNodeSelection)
    assert view.selected_text() == interior

    assert grow_texts(sessions, view, 1) == [literal]


@pytest.mark.parametrize(
    ("needle", "offset"),
    [("x: i32", 0), ("y: 2", 3), ("2, 3", 0), ("zero", 1), ("'c'", 1), ("p.x,", 2)],
)
def test_grow_terminates_with_strictly_larger_spans(needle: str, offset: int) -> None:
    sessions, view = make_session(PROGRAM, needle, offset=offset)
    sessions.begin_selection("s1")
    previous = sessions.history("s1")[-1].span

    for _ in range(100):
        result = sessions.grow_selection("s1")
        if not result.changed:
            assert result.status == "at_root"
            break
        (old_start, old_end), (new_start, new_end) = previous, result.selection.span
        assert new_start <= old_start and old_end <= new_end
        assert (new_start, new_end) != (old_start, old_end)
        previous = result.selection.span
    else:
        pytest.fail("selection never reached the document root")

    root = sessions.parser.tree_for_document(DOCUMENT)
    assert previous == (root.start_point, root.end_point)
    assert sessions.grow_selection("s1").status == "at_root"


def test_shrink_replays_history_back_to_seed() -> None:
    sessions, view = make_session(PROGRAM, "p.x,", offset=2)
    sessions.begin_selection("s1")
    spans = [view.selection]
    for _ in range(6):
        sessions.grow_selection("s1")
        spans.append(view.selection)

    for expected in reversed(spans[:-1]):
        result = sessions.shrink_selection("s1")
        assert result.status == "shrink"
        assert view.selection == expected

    assert len(sessions.history("s1")) == 1
    at_seed = sessions.shrink_selection("s1")
    assert at_seed.changed is False
    assert at_seed.status == "at_seed"
    assert at_seed.selection is sessions.history("s1")[0]
    assert view.selection == spans[0]


def test_no_node_under_cursor_is_reported_without_state_change() -> None:
    sessions, view = make_session("", "")

    result = sessions.begin_selection("s1")

    assert result.changed is False
    assert result.status == "no_node"
    assert result.message == "No node at cursor!"
    assert sessions.history("s1") == ()
    assert view.selection is None


def test_grow_and_shrink_before_begin() -> None:
    sessions, _ = make_session("fn main() {}", "main")

    assert sessions.grow_selection("s1").status == "no_selection"
    assert sessions.shrink_selection("s1").status == "no_selection"


def test_begin_reseeds_history() -> None:
    sessions, view = make_session("fn main() { f(1, 2); }", "2")
    sessions.begin_selection("s1")
    sessions.grow_selection("s1")
    assert len(sessions.history("s1")) == 2

    sessions.begin_selection("s1")

    assert len(sessions.history("s1")) == 1
    assert view.selected_text() == "2"


def test_iteration_limit_leaves_history_untouched() -> None:
    @dataclass(frozen=True)
    class Standstill:
        def expand(self, current, parent):
            return tuple(current)

    climber = TreeClimber(RuleTable(default=Standstill()), max_iterations=3)
    sessions, view = make_session("fn main() { f(1, 2); }", "1", climber=climber)
    sessions.begin_selection("s1")
    before = view.selection

    with pytest.raises(IterationLimitError):
        sessions.grow_selection("s1")

    assert len(sessions.history("s1")) == 1
    assert view.selection == before


def test_unknown_session() -> None:
    sessions, _ = make_session("fn main() {}", "main")

    with pytest.raises(SessionNotFoundError):
        sessions.grow_selection("missing")


def test_sessions_are_independent_and_closed_per_document() -> None:
    parser = RustParserService()
    parser.open_document("a.rs", "fn a() { f(1, 2); }")
    parser.open_document("b.rs", "fn b() { g(3, 4); }")
    sessions = SelectionSessions(parser, config=ClimberConfig())
    view_a = BufferEditorView(parser, "a.rs", cursor=(0, 11))
    view_b = BufferEditorView(parser, "b.rs", cursor=(0, 11))
    sessions.open_session("a", view_a)
    sessions.open_session("b", view_b)

    sessions.begin_selection("a")
    sessions.begin_selection("b")
    sessions.grow_selection("a")

    assert len(sessions.history("a")) == 2
    assert len(sessions.history("b")) == 1
    assert view_b.selected_text() == "3"

    assert sessions.close_document("a.rs") == ["a"]
    assert list(sessions.iter_sessions()) == ["b"]
    with pytest.raises(SessionNotFoundError):
        sessions.history("a")


def test_open_session_rejects_duplicates() -> None:
    sessions, view = make_session("fn main() {}", "main")

    with pytest.raises(ValueError):
        sessions.open_session("s1", view)

    sessions.open_session("s1", view, replace=True)
    assert sessions.close_session("s1") is True
    assert sessions.close_session("s1") is False
