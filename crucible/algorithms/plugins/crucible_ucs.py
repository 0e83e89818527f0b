from __future__ import annotations

from ..heuristics import zero
from ..search import shortest_constrained_path
from ..types import AlgorithmResult, AlgorithmSpec, RouteProblem, RunOptions, SearchExhausted

ALGORITHM = AlgorithmSpec(
    id="crucible_ucs",
    name="Crucible uniform-cost",
    description="Same state space as Crucible A* but without a heuristic (plain Dijkstra).",
)


def run(problem: RouteProblem, options: RunOptions) -> AlgorithmResult:
    try:
        result = shortest_constrained_path(
            problem.grid,
            options.min_run,
            options.max_run,
            start=problem.start,
            goal=problem.goal,
            heuristic=zero,
            lookahead=options.lookahead,
            track_path=options.return_path,
            return_visited=options.return_visited,
            max_visited=options.max_visited,
        )
    except SearchExhausted as e:
        return AlgorithmResult.exhausted(expanded=e.expanded)
    return AlgorithmResult.from_search(result)
