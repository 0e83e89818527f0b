from __future__ import annotations

from math import inf
from typing import Dict, List, Optional, Union

from .types import State


class CostLedger:
    """Best known cost-so-far per state.

    Values only ever decrease. When ``track_parents`` is set, each improvement
    also records the state it was reached from so the winning path can be
    walked back.
    """

    def __init__(self, track_parents: bool = False):
        self._best: Dict[State, int] = {}
        self._parent: Dict[State, Optional[State]] = {}
        self.track_parents = track_parents

    def __len__(self) -> int:
        return len(self._best)

    def __contains__(self, state: State) -> bool:
        return state in self._best

    def get(self, state: State) -> Union[int, float]:
        return self._best.get(state, inf)

    def relax(self, state: State, cost: int, parent: Optional[State] = None) -> bool:
        # Ties are rejected, not just losses.
        if cost >= self._best.get(state, inf):
            return False
        self._best[state] = cost
        if self.track_parents:
            self._parent[state] = parent
        return True

    def path_to(self, state: State) -> List[State]:
        if not self.track_parents:
            raise RuntimeError("parent tracking is disabled for this ledger")
        out: List[State] = []
        cur: Optional[State] = state
        while cur is not None:
            out.append(cur)
            cur = self._parent.get(cur)
        out.reverse()
        return out
