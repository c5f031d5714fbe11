"""Error taxonomy for the selection engine."""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple


class ClimbInvariantError(AssertionError):
    """A precondition or invariant of the climbing engine does not hold.

    These signal defects in the engine or its rule table, never user
    mistakes; callers should let them propagate.
    """

    def __init__(
        self,
        message: str,
        *,
        invariant: str,
        nodes: Iterable[str] = (),
    ) -> None:
        super().__init__(f"Invariant violated ({invariant}): {message}")
        self.invariant = invariant
        self.nodes: Tuple[str, ...] = tuple(nodes)


class IterationLimitError(ClimbInvariantError):
    """The grow driver made no coordinate progress within the iteration ceiling."""

    def __init__(self, limit: int, visited: Sequence[Tuple[str, ...]]) -> None:
        tail = " -> ".join("/".join(types) for types in visited[-8:])
        super().__init__(
            f"Iterations limit ({limit}) reached; last visited: {tail}. "
            "Please report this as a bug along with the source file",
            invariant="iteration_limit",
            nodes=visited[-1] if visited else (),
        )
        self.limit = limit
        self.visited: Tuple[Tuple[str, ...], ...] = tuple(visited)


__all__ = ["ClimbInvariantError", "IterationLimitError"]
