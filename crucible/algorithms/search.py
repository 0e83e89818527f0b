"""Constrained shortest-path search over a cost grid.

The search space is not the grid's cells but ``(position, heading, run)``
states, because the same cell can have different legal continuations
depending on how the crucible arrived there. Otherwise this is ordinary A*:
a binary heap without decrease-key, a cost ledger relaxed with ``>=``, and a
stale-entry check when entries come off the heap.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .frontier import Frontier
from .heuristics import Heuristic, scaled_manhattan
from .ledger import CostLedger
from .transitions import seed_moves, successors
from .types import (
    Grid,
    InvalidProblemError,
    Position,
    SearchEvent,
    SearchExhausted,
    SearchResult,
    SearchStatus,
    State,
    validate_run_bounds,
)
from ..config import MAX_VISITED

logger = logging.getLogger(__name__)

Observer = Callable[[SearchEvent, State, int], None]


class LoggingObserver:
    """Observer that writes every search event to a logger at DEBUG."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def __call__(self, event: SearchEvent, state: State, cost: int) -> None:
        self.log.debug("%-8s %s C=%d", event.value, state, cost)


def shortest_constrained_path(
    grid: Grid,
    min_run: int,
    max_run: int,
    *,
    start: Optional[Position] = None,
    goal: Optional[Position] = None,
    heuristic: Optional[Heuristic] = None,
    lookahead: bool = True,
    track_path: bool = False,
    return_visited: bool = False,
    max_visited: int = MAX_VISITED,
    observer: Optional[Observer] = None,
) -> SearchResult:
    """Minimum total cost from ``start`` to ``goal`` under run-length limits.

    Parameters
    ----------
    grid:
        Cost of entering each cell.
    min_run, max_run:
        The crucible must travel at least ``min_run`` cells before it may turn
        (or stop at the goal) and at most ``max_run`` cells before it must turn.
    start, goal:
        Default to the top-left and bottom-right corners.
    heuristic:
        Must be admissible. Defaults to Manhattan distance scaled by the
        cheapest cell, which stays admissible for zero-cost cells.
    lookahead:
        Skip turns into corridors too short to complete ``min_run``.
    track_path:
        Fill ``SearchResult.path`` with the states of one optimal route.
    observer:
        Called as ``observer(event, state, cost)`` when a state is relaxed,
        dequeued, or accepted as the goal.

    Raises
    ------
    InvalidProblemError
        Bad run bounds or start/goal outside the grid.
    SearchExhausted
        No route to the goal satisfies the constraints.
    """
    validate_run_bounds(min_run, max_run)
    start = grid.top_left if start is None else start
    goal = grid.bottom_right if goal is None else goal
    for name, p in (("start", start), ("goal", goal)):
        if not grid.in_bounds(*p):
            raise InvalidProblemError(f"{name} {p} is outside the grid")
    h = heuristic or scaled_manhattan(grid)

    # Standing still only counts as arriving when no minimum run applies.
    if start == goal and min_run == 1:
        return SearchResult(cost=0, visited=[start] if return_visited else [])

    logger.debug(
        "searching %dx%d grid %s -> %s with min_run=%d max_run=%d",
        grid.width, grid.height, start, goal, min_run, max_run,
    )

    ledger = CostLedger(track_parents=track_path)
    frontier = Frontier()
    visited_out: List[Position] = []
    expanded = 0

    def enqueue(state: State, cost: int, parent: Optional[State]) -> None:
        if not ledger.relax(state, cost, parent):
            return
        if observer is not None:
            observer(SearchEvent.RELAXED, state, cost)
        frontier.push(state, cost, cost + h(state.position, goal))

    for move in seed_moves(grid, start):
        enqueue(move.state, move.cost, None)

    while frontier:
        state, cost, _priority = frontier.pop()
        if cost != ledger.get(state):
            continue

        expanded += 1
        if observer is not None:
            observer(SearchEvent.DEQUEUED, state, cost)
        if return_visited and len(visited_out) < max_visited:
            visited_out.append(state.position)

        if state.position == goal and state.run >= min_run:
            if observer is not None:
                observer(SearchEvent.GOAL, state, cost)
            logger.debug("found cost %d after %d expansions", cost, expanded)
            return SearchResult(
                cost=cost,
                path=ledger.path_to(state) if track_path else [],
                visited=visited_out,
                expanded=expanded,
                pushed=frontier.pushed,
                status=SearchStatus.FOUND,
            )

        for move in successors(grid, state, min_run, max_run, lookahead):
            enqueue(move.state, cost + move.cost, state)

    logger.info(
        "search exhausted on %dx%d grid (min_run=%d, max_run=%d, expanded=%d)",
        grid.width, grid.height, min_run, max_run, expanded,
    )
    raise SearchExhausted(min_run, max_run, expanded)
