from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Tuple

import pytest

from tree_climber.runtime import telemetry


class RecordingLogger:
    def __init__(self) -> None:
        self.lines: List[Tuple[str, str, Dict[str, str]]] = []
        self.context: Dict[str, str] = {}
        self.profiled: List[str] = []
        self.components: List[str] = []

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str):
        self.profiled.append(name)
        yield

    @contextmanager
    def track_component(self, name: str):
        self.components.append(name)
        yield

    def debug_with(self, message: str, pairs: Any) -> None:
        self.lines.append(("debug", message, dict(pairs)))

    def error_with(self, message: str, pairs: Any) -> None:
        self.lines.append(("error", message, dict(pairs)))


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    return logger


def test_span_reports_metadata_on_exit(recorder: RecordingLogger) -> None:
    with telemetry.span(
        "selection::grow", component="selection", metadata={"session": "s1"}
    ) as handle:
        assert recorder.context == {"session": "s1"}
        handle.add_metadata("depth", 3)

    assert recorder.context == {}
    assert recorder.profiled == ["selection::grow"]
    assert recorder.components == ["selection"]
    level, message, payload = recorder.lines[-1]
    assert (level, message) == ("debug", "span::done")
    assert payload["depth"] == "3"
    assert payload["component"] == "selection"


def test_span_reports_failure_and_reraises(recorder: RecordingLogger) -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("selection::grow", metadata={"session": "s1"}):
            raise RuntimeError("stuck")

    level, message, payload = recorder.lines[-1]
    assert (level, message) == ("error", "span::fail")
    assert payload["reason"] == "stuck"
    assert recorder.context == {}


def test_record_event_uses_structured_method(recorder: RecordingLogger) -> None:
    telemetry.record_event("selection.begin", level="debug", data={"span": (0, 1, 0, 4)})

    assert recorder.lines == [
        (
            "debug",
            "event::selection.begin",
            {"event": "selection.begin", "span": "(0, 1, 0, 4)"},
        )
    ]


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="chatty")
