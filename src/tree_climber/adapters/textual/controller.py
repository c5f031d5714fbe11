"""Minimal Textual adapter that wires selection sessions into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from tree_climber.sessions import SelectionResult, SelectionSessions
from tree_climber.syntax import EditorSpan


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


DEFAULT_KEYS: Mapping[str, str] = {
    "ctrl+space": "begin",
    "alt+up": "grow",
    "alt+down": "shrink",
}


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_selection: Callable[[EditorSpan], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualSelectionAdapter:
    """Bridges Textual key names to one selection session."""

    def __init__(
        self,
        sessions: SelectionSessions,
        session_id: str,
        hooks: TextualUIHooks,
        *,
        keys: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.sessions = sessions
        self.session_id = session_id
        self.hooks = hooks
        self.keys: Dict[str, str] = dict(keys or DEFAULT_KEYS)
        self._actions: Dict[str, Callable[[str], SelectionResult]] = {
            "begin": sessions.begin_selection,
            "grow": sessions.grow_selection,
            "shrink": sessions.shrink_selection,
        }

    def handle_textual_key(self, key: str) -> Optional[SelectionResult]:
        """Run the action bound to ``key``; ``None`` if the key is unbound."""

        action = self.keys.get(key.lower())
        self._log_state("key ->", key=key, action=action)
        if action is None:
            return None
        return self.run_action(action)

    def run_action(self, action: str) -> SelectionResult:
        try:
            operation = self._actions[action]
        except KeyError as exc:
            raise ValueError(f"Unknown selection action '{action}'") from exc

        result = operation(self.session_id)
        self._after_result(result)
        self._log_state(
            "result <-",
            changed=result.changed,
            status=result.status,
            message=result.message,
            span=result.span,
        )
        return result

    def _after_result(self, result: SelectionResult) -> None:
        self.hooks.update_status(result.message or result.status)
        if result.changed and result.span is not None:
            self.hooks.update_selection(result.span)
        self.hooks.handle_event(f"selection.{result.status}", result.span)

    def _log_state(self, prefix: str, **fields: object) -> None:
        parts = [prefix, f"session={self.session_id!r}"]
        for key, value in fields.items():
            if value is not None:
                parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = ["DEFAULT_KEYS", "TextualSelectionAdapter", "TextualUIHooks"]
