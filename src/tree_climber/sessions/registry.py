"""Session registry exposing begin / grow / shrink to host editors."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from tree_climber.climbing import TreeClimber, get_profile, seed_selection
from tree_climber.runtime import ClimberConfig, telemetry
from tree_climber.selection import Selection, SelectionHistory
from tree_climber.syntax import EditorSpan, RustParserService

from .view import EditorView


class SessionNotFoundError(KeyError):
    """Raised when an operation names a session that was never opened."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session '{session_id}' is not open")
        self.session_id = session_id


@dataclass(slots=True)
class SelectionResult:
    """Outcome of a session operation."""

    changed: bool
    status: str = "ok"
    message: Optional[str] = None
    selection: Optional[Selection] = None
    span: Optional[EditorSpan] = None


@dataclass(slots=True)
class SelectionSession:
    """History and view owned by a single editing session."""

    session_id: str
    view: EditorView
    history: Optional[SelectionHistory] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class SelectionSessions:
    """Owns every live selection session, keyed by session id.

    Operations on one session are serialised by that session's lock;
    separate sessions share no mutable state.
    """

    def __init__(
        self,
        parser: RustParserService,
        *,
        config: ClimberConfig | None = None,
        climber: TreeClimber | None = None,
        logger_name: str | None = None,
    ) -> None:
        self.parser = parser
        self.config = config or ClimberConfig.from_env()
        self.profile = get_profile(self.config.language)
        self.climber = climber or TreeClimber(
            self.profile.rules, max_iterations=self.config.max_iterations
        )
        self._logger_name = logger_name or "tree_climber.sessions"
        self.logger = telemetry.get_logger(self._logger_name)
        self._sessions: Dict[str, SelectionSession] = {}
        self._registry_lock = threading.Lock()

    def open_session(
        self, session_id: str, view: EditorView, *, replace: bool = False
    ) -> SelectionSession:
        with self._registry_lock:
            if not replace and session_id in self._sessions:
                raise ValueError(f"Session '{session_id}' already open")
            session = SelectionSession(session_id=session_id, view=view)
            self._sessions[session_id] = session
            return session

    def close_session(self, session_id: str) -> bool:
        with self._registry_lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        telemetry.record_event(
            "selection.close",
            level="debug",
            data={"session": session_id},
            logger_name=self._logger_name,
        )
        return True

    def close_document(self, document_id: str) -> List[str]:
        """Tear down every session viewing ``document_id``."""

        with self._registry_lock:
            doomed = [
                session_id
                for session_id, session in self._sessions.items()
                if session.view.document_id == document_id
            ]
        for session_id in doomed:
            self.close_session(session_id)
        return doomed

    def iter_sessions(self) -> Iterator[str]:
        with self._registry_lock:
            return iter(tuple(self._sessions))

    def history(self, session_id: str) -> Tuple[Selection, ...]:
        history = self._session(session_id).history
        return tuple(history) if history is not None else ()

    def begin_selection(self, session_id: str) -> SelectionResult:
        session = self._session(session_id)
        with session.lock, telemetry.span(
            "selection::begin",
            logger_name=self._logger_name,
            component="selection",
            metadata={"session": session_id},
        ) as handle:
            node = session.view.node_at_cursor()
            if node is None:
                handle.add_metadata("status", "no_node")
                telemetry.record_event(
                    "selection.no_node",
                    level="warning",
                    data={"session": session_id},
                    logger_name=self._logger_name,
                )
                return SelectionResult(
                    changed=False, status="no_node", message="No node at cursor!"
                )

            selection = seed_selection(node, self.profile)
            session.history = SelectionHistory(selection)
            handle.add_metadata("node", node.type)
            return self._render(session, selection, status="begin")

    def grow_selection(self, session_id: str) -> SelectionResult:
        session = self._session(session_id)
        with session.lock, telemetry.span(
            "selection::grow",
            logger_name=self._logger_name,
            component="selection",
            metadata={"session": session_id},
        ) as handle:
            history = session.history
            if history is None:
                return SelectionResult(changed=False, status="no_selection")

            root = self.parser.tree_for_document(session.view.document_id)
            following = self.climber.grow(history.peek(), root)
            if following is None:
                handle.add_metadata("status", "at_root")
                return SelectionResult(
                    changed=False, status="at_root", selection=history.peek()
                )

            history.push(following)
            handle.add_metadata("depth", history.depth)
            return self._render(session, following, status="grow")

    def shrink_selection(self, session_id: str) -> SelectionResult:
        session = self._session(session_id)
        with session.lock, telemetry.span(
            "selection::shrink",
            logger_name=self._logger_name,
            component="selection",
            metadata={"session": session_id},
        ) as handle:
            history = session.history
            if history is None:
                return SelectionResult(changed=False, status="no_selection")
            if not history.can_shrink():
                handle.add_metadata("status", "at_seed")
                return SelectionResult(
                    changed=False, status="at_seed", selection=history.seed
                )

            previous = history.pop()
            handle.add_metadata("depth", history.depth)
            return self._render(session, previous, status="shrink")

    def _render(
        self, session: SelectionSession, selection: Selection, *, status: str
    ) -> SelectionResult:
        start, end = selection.span
        span = self.parser.editor_span(session.view.document_id, start, end)
        session.view.set_selection(*span)
        telemetry.record_event(
            f"selection.{status}",
            level="debug",
            data={"session": session.session_id, "span": span},
            logger_name=self._logger_name,
        )
        return SelectionResult(
            changed=True, status=status, selection=selection, span=span
        )

    def _session(self, session_id: str) -> SelectionSession:
        with self._registry_lock:
            try:
                return self._sessions[session_id]
            except KeyError as exc:
                raise SessionNotFoundError(session_id) from exc


__all__ = [
    "SelectionResult",
    "SelectionSession",
    "SelectionSessions",
    "SessionNotFoundError",
]
