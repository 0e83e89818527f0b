from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .types import Direction, Grid, Position, State


@dataclass(frozen=True)
class Move:
    state: State
    cost: int


def seed_moves(grid: Grid, start: Position) -> Iterator[Move]:
    """First moves out of the start cell, which has no heading yet.

    Every heading that stays on the grid is tried, east and south first. From
    the top-left corner that leaves exactly those two.
    """
    for heading in (Direction.EAST, Direction.SOUTH, Direction.WEST, Direction.NORTH):
        nxt = heading.step(start)
        if grid.in_bounds(*nxt):
            yield Move(State(nxt, heading, 1), grid.cost(*nxt))


def successors(
    grid: Grid,
    state: State,
    min_run: int,
    max_run: int,
    lookahead: bool = True,
) -> Iterator[Move]:
    """Yield the legal moves out of ``state`` with the cost of entering each.

    - Going straight is allowed while ``run < max_run``.
    - Turning 90 degrees is allowed once ``run >= min_run`` and resets the run.
    - Reversing is never allowed.

    With ``lookahead`` on, a turn is also dropped when the cell ``min_run``
    steps away in the new heading is off the grid: the crucible could never
    complete its minimum run there. This prunes dead ends early but never
    changes the optimal cost.
    """
    heading = state.heading
    if state.run < max_run:
        nxt = heading.step(state.position)
        if grid.in_bounds(*nxt):
            yield Move(State(nxt, heading, state.run + 1), grid.cost(*nxt))

    if state.run < min_run:
        return

    for turn in heading.perpendicular():
        nxt = turn.step(state.position)
        if not grid.in_bounds(*nxt):
            continue
        if lookahead and min_run > 1 and not grid.in_bounds(*turn.step(state.position, min_run)):
            continue
        yield Move(State(nxt, turn, 1), grid.cost(*nxt))
