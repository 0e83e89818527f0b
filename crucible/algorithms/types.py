from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import DEFAULT_MAX_RUN, DEFAULT_MIN_RUN, MAX_VISITED

Position = Tuple[int, int]  # (x, y), y grows downward


class InvalidProblemError(ValueError):
    """Raised before any search starts when a query is structurally invalid."""


class SearchExhausted(Exception):
    """No path to the goal satisfies the run-length constraints.

    The search is deterministic, so retrying the same query cannot succeed.
    """

    def __init__(self, min_run: int, max_run: int, expanded: int = 0):
        super().__init__(
            f"No path satisfies min_run={min_run}, max_run={max_run} "
            f"(expanded {expanded} states)"
        )
        self.min_run = min_run
        self.max_run = max_run
        self.expanded = expanded


class Direction(Enum):
    """Compass heading. The value is the glyph used when drawing a path."""

    NORTH = "^"
    SOUTH = "v"
    EAST = ">"
    WEST = "<"

    @property
    def delta(self) -> Position:
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def perpendicular(self) -> Tuple[Direction, Direction]:
        if self in (Direction.NORTH, Direction.SOUTH):
            return Direction.EAST, Direction.WEST
        return Direction.NORTH, Direction.SOUTH

    def is_turn_from(self, other: Direction) -> bool:
        return self is not other and self is not other.opposite

    def step(self, position: Position, distance: int = 1) -> Position:
        dx, dy = _DELTAS[self]
        return position[0] + dx * distance, position[1] + dy * distance


_DELTAS = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}

_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


@dataclass(frozen=True)
class State:
    """A search node: where the crucible is, which way it faces, and how long
    it has been going that way (the arrival move included).

    The same cell reached with a different heading or run is a different node
    because it has different legal continuations.
    """

    position: Position
    heading: Direction
    run: int

    def __str__(self) -> str:
        return f"({self.position[0]}, {self.position[1]}) {self.heading.value} {self.run}"


@dataclass(frozen=True)
class Grid:
    """Immutable rectangular matrix of non-negative traversal costs.

    Notes
    -----
    - Cells are stored row-major: ``cells[y][x]``.
    - Entering a cell costs ``cost(x, y)``; leaving it is free.
    - Zero costs are allowed; the search never assumes a positive step.
    """

    cells: Tuple[Tuple[int, ...], ...]

    def __post_init__(self) -> None:
        if not self.cells or not self.cells[0]:
            raise InvalidProblemError("grid must have at least one row and one column")
        width = len(self.cells[0])
        for y, row in enumerate(self.cells):
            if len(row) != width:
                raise InvalidProblemError(f"row {y} has length {len(row)}, expected {width}")
            for x, c in enumerate(row):
                if c < 0:
                    raise InvalidProblemError(f"negative cost {c} at ({x}, {y})")

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[int]]) -> Grid:
        return cls(tuple(tuple(int(c) for c in row) for row in rows))

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Grid:
        """Parse a digit matrix, one row per line. Blank lines are ignored."""
        rows = []
        for y, line in enumerate(lines):
            line = line.strip()
            if not line:
                continue
            if not line.isdigit():
                raise InvalidProblemError(f"line {y} contains non-digit characters: {line!r}")
            rows.append([int(ch) for ch in line])
        return cls.from_rows(rows)

    @property
    def width(self) -> int:
        return len(self.cells[0])

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def top_left(self) -> Position:
        return 0, 0

    @property
    def bottom_right(self) -> Position:
        return self.width - 1, self.height - 1

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cost(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside a {self.width}x{self.height} grid")
        return self.cells[y][x]

    def to_lines(self) -> List[str]:
        return ["".join(str(c) for c in row) for row in self.cells]


@dataclass(frozen=True)
class AlgorithmSpec:
    """Metadata for an algorithm plugin."""

    id: str
    name: str
    description: str = ""


@dataclass
class RunOptions:
    min_run: int = DEFAULT_MIN_RUN
    max_run: int = DEFAULT_MAX_RUN
    lookahead: bool = True
    return_path: bool = False
    return_visited: bool = False
    max_visited: int = MAX_VISITED


@dataclass
class RouteProblem:
    """A single-source single-target query against a cost grid.

    Start and goal default to the top-left and bottom-right corners.
    """

    grid: Grid
    start: Optional[Position] = None
    goal: Optional[Position] = None

    def __post_init__(self) -> None:
        if self.start is None:
            self.start = self.grid.top_left
        if self.goal is None:
            self.goal = self.grid.bottom_right
        for name, p in (("start", self.start), ("goal", self.goal)):
            if not self.grid.in_bounds(*p):
                raise InvalidProblemError(f"{name} {p} is outside the grid")


class SearchStatus(Enum):
    FOUND = "found"
    EXHAUSTED = "exhausted"


class SearchEvent(Enum):
    DEQUEUED = "dequeued"
    RELAXED = "relaxed"
    GOAL = "goal"


@dataclass
class SearchResult:
    cost: int
    path: List[State] = field(default_factory=list)
    visited: List[Position] = field(default_factory=list)
    expanded: int = 0
    pushed: int = 0
    status: SearchStatus = SearchStatus.FOUND


@dataclass
class AlgorithmResult:
    """What a plugin hands back to the service.

    An exhausted search is reported with ``status=EXHAUSTED`` and
    ``cost=None``, never with a sentinel cost.
    """

    status: SearchStatus
    cost: Optional[int]
    path: List[State] = field(default_factory=list)
    visited: List[Position] = field(default_factory=list)
    expanded: int = 0

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @classmethod
    def from_search(cls, result: SearchResult) -> AlgorithmResult:
        return cls(
            status=result.status,
            cost=result.cost,
            path=result.path,
            visited=result.visited,
            expanded=result.expanded,
        )

    @classmethod
    def exhausted(cls, expanded: int = 0) -> AlgorithmResult:
        return cls(status=SearchStatus.EXHAUSTED, cost=None, expanded=expanded)


def validate_run_bounds(min_run: int, max_run: int) -> None:
    if min_run < 1:
        raise InvalidProblemError(f"min_run must be >= 1, got {min_run}")
    if max_run < min_run:
        raise InvalidProblemError(f"max_run ({max_run}) must be >= min_run ({min_run})")


def states_along(cells: List[Position]) -> List[State]:
    """Convert a cell walk (start included) into the states it passes through.

    The start cell has no heading, so the result has one entry per move.
    """
    out: List[State] = []
    for (ax, ay), (bx, by) in zip(cells, cells[1:]):
        heading = _HEADING_OF[(bx - ax, by - ay)]
        run = out[-1].run + 1 if out and out[-1].heading is heading else 1
        out.append(State((bx, by), heading, run))
    return out


_HEADING_OF = {delta: d for d, delta in _DELTAS.items()}


def path_cost(grid: Grid, path: List[State]) -> int:
    return sum(grid.cost(*s.position) for s in path)
