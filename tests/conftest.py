from __future__ import annotations

from typing import List

import pytest

from crucible.algorithms.types import Direction, Grid, State, path_cost

SAMPLE = """\
2413432311323
3215453535623
3255245654254
3446585845452
4546657867536
1438598798454
4457876987766
3637877979653
4654967986887
4564679986453
1224686865563
2546548887735
4322674655533
"""

UNFORTUNATE = """\
111111111111
999999999991
999999999991
999999999991
999999999991
"""


def uniform(width: int, height: int, cost: int = 1) -> Grid:
    return Grid.from_rows([[cost] * width for _ in range(height)])


@pytest.fixture
def sample_grid() -> Grid:
    return Grid.from_lines(SAMPLE.splitlines())


@pytest.fixture
def unfortunate_grid() -> Grid:
    return Grid.from_lines(UNFORTUNATE.splitlines())


def assert_legal_route(grid: Grid, path: List[State], cost: int, min_run: int, max_run: int) -> None:
    """Check a reconstructed route against the movement rules and its cost."""
    assert path, "expected a non-empty route"
    assert path[0].run == 1
    assert path[0].heading in (Direction.EAST, Direction.SOUTH)
    assert path[0].position == path[0].heading.step(grid.top_left)
    for prev, cur in zip(path, path[1:]):
        assert cur.position == cur.heading.step(prev.position)
        assert cur.heading is not prev.heading.opposite
        if cur.heading is prev.heading:
            assert cur.run == prev.run + 1
        else:
            assert prev.run >= min_run
            assert cur.run == 1
        assert cur.run <= max_run
    assert path[-1].position == grid.bottom_right
    assert path[-1].run >= min_run
    assert path_cost(grid, path) == cost
