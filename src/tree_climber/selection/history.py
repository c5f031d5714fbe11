"""Per-session stack of past selections."""

from __future__ import annotations

from typing import Iterator, List

from .model import Selection


class SelectionHistory:
    """Append-only selection stack seeded by ``begin_selection``.

    The seed entry is never popped: shrinking at depth one is a no-op.
    """

    def __init__(self, seed: Selection) -> None:
        self._entries: List[Selection] = [seed]

    def push(self, selection: Selection) -> None:
        self._entries.append(selection)

    def pop(self) -> Selection:
        """Drop the newest entry (unless it is the seed) and return the new top."""

        if len(self._entries) > 1:
            self._entries.pop()
        return self._entries[-1]

    def peek(self) -> Selection:
        return self._entries[-1]

    @property
    def seed(self) -> Selection:
        return self._entries[0]

    @property
    def depth(self) -> int:
        return len(self._entries)

    def can_shrink(self) -> bool:
        return len(self._entries) > 1

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Selection]:
        return iter(tuple(self._entries))


__all__ = ["SelectionHistory"]
