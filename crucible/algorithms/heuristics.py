from __future__ import annotations

from typing import Callable

from .types import Grid, Position

Heuristic = Callable[[Position, Position], int]


def manhattan(position: Position, goal: Position) -> int:
    return abs(goal[0] - position[0]) + abs(goal[1] - position[1])


def zero(position: Position, goal: Position) -> int:
    return 0


def min_step_cost(grid: Grid) -> int:
    return min(min(row) for row in grid.cells)


def scaled_manhattan(grid: Grid) -> Heuristic:
    """Manhattan distance scaled by the cheapest cell in the grid.

    Every remaining move enters at least one cell, so this never overestimates
    even when the grid contains zero-cost cells (it degrades to :func:`zero`).
    On grids whose cheapest cell costs 1 this is plain Manhattan distance.
    """
    floor = min_step_cost(grid)
    if floor == 0:
        return zero
    if floor == 1:
        return manhattan

    def h(position: Position, goal: Position) -> int:
        return manhattan(position, goal) * floor

    return h
