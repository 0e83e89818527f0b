from __future__ import annotations

import heapq
from math import inf
from typing import Dict, List, Optional

from ..types import (
    AlgorithmResult,
    AlgorithmSpec,
    Direction,
    Position,
    RouteProblem,
    RunOptions,
    SearchStatus,
    states_along,
)

ALGORITHM = AlgorithmSpec(
    id="dijkstra",
    name="Dijkstra (unconstrained)",
    description="4-neighbour shortest path ignoring run-length limits; a lower bound for the crucible.",
)


def _reconstruct(came_from: Dict[Position, Optional[Position]], goal: Position) -> List[Position]:
    out: List[Position] = []
    cur: Optional[Position] = goal
    while cur is not None:
        out.append(cur)
        cur = came_from[cur]
    out.reverse()
    return out


def run(problem: RouteProblem, options: RunOptions) -> AlgorithmResult:
    grid = problem.grid
    start = problem.start
    goal = problem.goal

    dist: Dict[Position, int] = {start: 0}
    came_from: Dict[Position, Optional[Position]] = {start: None}

    pq: list[tuple[int, Position]] = [(0, start)]
    visited_out: List[Position] = []
    expanded = 0

    while pq:
        d, cur = heapq.heappop(pq)
        if d != dist[cur]:
            continue
        expanded += 1
        if options.return_visited and len(visited_out) < options.max_visited:
            visited_out.append(cur)

        if cur == goal:
            break

        for heading in Direction:
            nxt = heading.step(cur)
            if not grid.in_bounds(*nxt):
                continue
            nd = d + grid.cost(*nxt)
            if nd < dist.get(nxt, inf):
                dist[nxt] = nd
                came_from[nxt] = cur
                heapq.heappush(pq, (nd, nxt))

    # Every cell of a non-empty grid is reachable without run limits.
    path = states_along(_reconstruct(came_from, goal)) if options.return_path else []
    return AlgorithmResult(
        status=SearchStatus.FOUND,
        cost=dist[goal],
        path=path,
        visited=visited_out,
        expanded=expanded,
    )
