"""Executable Textual app that hosts structural selection over a Rust file."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Footer, Header, Static, TextArea
    from textual.widgets.text_area import Selection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use tree_climber.adapters.textual.app"
    ) from exc

from tree_climber.runtime import ClimberConfig, telemetry
from tree_climber.sessions import SelectionSessions
from tree_climber.syntax import RustParserService, SyntaxNode

from .controller import TextualSelectionAdapter, TextualUIHooks

SESSION_ID = "main"


class TextAreaEditorView:
    """``EditorView`` backed by a Textual ``TextArea``."""

    def __init__(
        self, text_area: TextArea, parser: RustParserService, document_id: str
    ) -> None:
        self._text_area = text_area
        self._parser = parser
        self._document_id = document_id

    @property
    def document_id(self) -> str:
        return self._document_id

    def node_at_cursor(self) -> Optional[SyntaxNode]:
        row, col = self._text_area.cursor_location
        return self._parser.node_at(self._document_id, row, col)

    def set_selection(
        self, start_row: int, start_col: int, end_row: int, end_col: int
    ) -> None:
        self._text_area.selection = Selection(
            start=(start_row, start_col), end=(end_row, end_col)
        )


class TreeClimberApp(App[None]):
    """Text area plus status line; selection keys drive a single session."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#source {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+space", "selection('begin')", "Select node", priority=True),
        Binding("alt+up", "selection('grow')", "Grow", priority=True),
        Binding("alt+down", "selection('shrink')", "Shrink", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, path: Path, *, config: ClimberConfig | None = None) -> None:
        super().__init__()
        self.path = path
        self.parser = RustParserService()
        self.sessions = SelectionSessions(self.parser, config=config)
        self.adapter: TextualSelectionAdapter | None = None
        self._text_area: TextArea | None = None
        self._status_widget: Static | None = None
        self.logger = telemetry.get_logger("tree_climber.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._text_area = TextArea(self._read_source(), id="source")
        yield self._text_area
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        assert self._text_area is not None
        document_id = str(self.path)
        self.parser.open_document(document_id, self._text_area.text)
        view = TextAreaEditorView(self._text_area, self.parser, document_id)
        self.sessions.open_session(SESSION_ID, view)
        hooks = TextualUIHooks(
            update_selection=lambda _span: None,
            update_status=self._update_status,
            log=self.logger.debug,
        )
        self.adapter = TextualSelectionAdapter(self.sessions, SESSION_ID, hooks)
        self._text_area.focus()

    def on_unmount(self) -> None:
        self.sessions.close_document(str(self.path))
        self.parser.close_document(str(self.path))

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self.parser.update_document(str(self.path), event.text_area.text)

    def action_selection(self, action: str) -> None:
        if self.adapter:
            self.adapter.run_action(action)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _read_source(self) -> str:
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding="utf-8")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Grow and shrink syntax-aware selections in a Rust file."
    )
    parser.add_argument("path", type=Path, help="Rust source file to open")
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Override TREE_CLIMBER_MAX_ITERATIONS for this run",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Telemetry preset to apply before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    config = ClimberConfig.from_env()
    if args.max_iterations is not None:
        config = ClimberConfig(
            max_iterations=args.max_iterations, language=config.language
        )
    TreeClimberApp(args.path, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
