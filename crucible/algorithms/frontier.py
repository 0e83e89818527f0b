from __future__ import annotations

import heapq
from typing import List, Tuple

from .types import State


class Frontier:
    """Min-heap of pending states keyed by ``cost + heuristic``.

    Equal priorities pop in insertion order. There is no decrease-key: a
    cheaper route to a queued state is pushed as a new entry and the old one
    is left behind, so callers must compare the popped cost against the
    ledger and skip entries that no longer match.
    """

    def __init__(self) -> None:
        # (priority, seq, cost, state)
        self._heap: List[Tuple[int, int, int, State]] = []
        self._seq = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, state: State, cost: int, priority: int) -> None:
        self._seq += 1
        heapq.heappush(self._heap, (priority, self._seq, cost, state))

    def pop(self) -> Tuple[State, int, int]:
        """Return ``(state, cost, priority)`` for the lowest-priority entry."""
        priority, _, cost, state = heapq.heappop(self._heap)
        return state, cost, priority

    @property
    def pushed(self) -> int:
        return self._seq
