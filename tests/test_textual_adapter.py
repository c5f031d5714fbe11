from __future__ import annotations

from typing import Any, Dict, List

import pytest

from tree_climber.adapters.textual import TextualSelectionAdapter, TextualUIHooks
from tree_climber.runtime import ClimberConfig
from tree_climber.sessions import BufferEditorView, SelectionSessions
from tree_climber.syntax import EditorSpan, RustParserService

SOURCE = "fn main() { let t = (123, 321, 444); }"


def make_sessions() -> tuple[SelectionSessions, BufferEditorView]:
    parser = RustParserService()
    parser.open_document("main.rs", SOURCE)
    view = BufferEditorView(parser, "main.rs", cursor=(0, SOURCE.index("321") + 1))
    sessions = SelectionSessions(parser, config=ClimberConfig())
    sessions.open_session("main", view)
    return sessions, view


def test_adapter_updates_selection_and_status() -> None:
    sessions, view = make_sessions()
    spans: List[EditorSpan] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_selection=lambda span: spans.append(span),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualSelectionAdapter(sessions, "main", hooks)

    adapter.handle_textual_key("ctrl+space")
    adapter.handle_textual_key("alt+up")
    adapter.handle_textual_key("alt+down")

    assert statuses == ["begin", "grow", "shrink"]
    assert spans[0] == spans[2] == view.selection
    assert view.selected_text() == "321"


def test_adapter_relays_selection_events() -> None:
    sessions, _ = make_sessions()
    events: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        update_selection=lambda span: None,
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
    )
    adapter = TextualSelectionAdapter(sessions, "main", hooks)

    adapter.run_action("grow")
    adapter.run_action("begin")
    adapter.run_action("shrink")

    assert [event["name"] for event in events] == [
        "selection.no_selection",
        "selection.begin",
        "selection.at_seed",
    ]
    assert events[0]["payload"] is None
    assert events[1]["payload"] is not None


def test_adapter_reports_missing_node_message() -> None:
    parser = RustParserService()
    parser.open_document("empty.rs", "")
    sessions = SelectionSessions(parser, config=ClimberConfig())
    sessions.open_session("empty", BufferEditorView(parser, "empty.rs"))
    statuses: List[str] = []
    spans: List[EditorSpan] = []
    hooks = TextualUIHooks(
        update_selection=lambda span: spans.append(span),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualSelectionAdapter(sessions, "empty", hooks)

    result = adapter.handle_textual_key("ctrl+space")

    assert result is not None and result.changed is False
    assert statuses == ["No node at cursor!"]
    assert spans == []


def test_adapter_ignores_unbound_keys_and_rejects_unknown_actions() -> None:
    sessions, _ = make_sessions()
    hooks = TextualUIHooks(update_selection=lambda span: None)
    adapter = TextualSelectionAdapter(sessions, "main", hooks, keys={"f5": "grow"})

    assert adapter.handle_textual_key("alt+up") is None
    assert adapter.handle_textual_key("F5").status == "no_selection"

    with pytest.raises(ValueError):
        adapter.run_action("select_everything")


def test_adapter_emits_log_lines() -> None:
    sessions, _ = make_sessions()
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_selection=lambda span: None,
        log=lambda line: logs.append(line),
    )
    adapter = TextualSelectionAdapter(sessions, "main", hooks)

    adapter.handle_textual_key("ctrl+space")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") and "status='begin'" in line for line in logs)
