from __future__ import annotations

from typing import List

from .types import Grid, State


def overlay_path(grid: Grid, path: List[State]) -> List[str]:
    """Draw ``path`` over the grid's digits.

    Each cell on the path shows the heading it was entered with; the start
    cell keeps its digit because it is never entered.
    """
    rows = [[str(c) for c in row] for row in grid.cells]
    for s in path:
        x, y = s.position
        rows[y][x] = s.heading.value
    return ["".join(row) for row in rows]
