"""Solve a digit-matrix cost grid from the command line.

    python -m crucible.cli input.txt              # both parts
    python -m crucible.cli input.txt --part 2 --render
    python -m crucible.cli input.txt --min-run 2 --max-run 5
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .algorithms.render import overlay_path
from .algorithms.search import LoggingObserver, shortest_constrained_path
from .algorithms.types import Grid, InvalidProblemError, SearchExhausted
from .config import LOG_LEVEL

logger = logging.getLogger(__name__)

# part number -> (min_run, max_run)
PARTS = {
    1: (1, 3),
    2: (4, 10),
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Minimum heat-loss route for a crucible over a digit grid.")
    ap.add_argument("input", nargs="?", default="input.txt", help="file with one row of digits per line")
    ap.add_argument("--part", type=int, choices=sorted(PARTS), help="run only this preset")
    ap.add_argument("--min-run", type=int, help="custom minimum straight run (needs --max-run)")
    ap.add_argument("--max-run", type=int, help="custom maximum straight run (needs --min-run)")
    ap.add_argument("--no-lookahead", action="store_true", help="disable the dead-end turn check")
    ap.add_argument("--render", action="store_true", help="print the grid with the chosen route drawn on it")
    ap.add_argument("--trace", action="store_true", help="log every search event at DEBUG")
    return ap


def _jobs(args: argparse.Namespace) -> List[Tuple[str, int, int]]:
    if (args.min_run is None) != (args.max_run is None):
        raise InvalidProblemError("--min-run and --max-run must be given together")
    if args.min_run is not None:
        return [("Custom", args.min_run, args.max_run)]
    parts = [args.part] if args.part else sorted(PARTS)
    return [(f"Part {p}", *PARTS[p]) for p in parts]


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.trace else LOG_LEVEL)

    try:
        grid = Grid.from_lines(Path(args.input).read_text().splitlines())
        jobs = _jobs(args)
    except (OSError, InvalidProblemError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    observer = LoggingObserver() if args.trace else None
    status = 0
    for label, min_run, max_run in jobs:
        t0 = time.perf_counter()
        try:
            result = shortest_constrained_path(
                grid,
                min_run,
                max_run,
                lookahead=not args.no_lookahead,
                track_path=args.render,
                observer=observer,
            )
        except InvalidProblemError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
        except SearchExhausted as e:
            print(f"{label}: {e}", file=sys.stderr)
            status = 1
            continue
        t1 = time.perf_counter()
        print(f"{label}: {result.cost} in {t1 - t0:.6f} sec")
        if args.render:
            print("\n".join(overlay_path(grid, result.path)))
    return status


if __name__ == "__main__":
    sys.exit(main())
