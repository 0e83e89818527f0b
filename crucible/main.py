from __future__ import annotations

import logging
import time
from typing import List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .algorithms.loader import list_algorithms, load_plugins
from .algorithms.render import overlay_path
from .algorithms.types import (
    AlgorithmResult,
    Grid,
    InvalidProblemError,
    RouteProblem,
    RunOptions,
    State,
    validate_run_bounds,
)
from .config import DEFAULT_MAX_RUN, DEFAULT_MIN_RUN, LOG_LEVEL, MAX_VISITED

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Crucible Route Planner", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

REGISTRY = load_plugins()


class AlgorithmInfo(BaseModel):
    id: str
    name: str
    description: str = ""


class GridModel(BaseModel):
    """Either ``rows`` (integer costs) or ``lines`` (digit strings)."""

    rows: Optional[List[List[int]]] = None
    lines: Optional[List[str]] = None


class RunOptionsModel(BaseModel):
    min_run: int = Field(default=DEFAULT_MIN_RUN, ge=1)
    max_run: int = Field(default=DEFAULT_MAX_RUN, ge=1)
    lookahead: bool = True
    return_path: bool = False
    return_visited: bool = False
    max_visited: int = Field(default=MAX_VISITED, ge=0)


class RunRequestModel(BaseModel):
    algorithm_id: str = "crucible_astar"
    grid: GridModel
    options: Optional[RunOptionsModel] = None


class StateModel(BaseModel):
    x: int
    y: int
    heading: str
    run: int


class RunResponseModel(BaseModel):
    found: bool
    cost: Optional[int]
    path: List[StateModel]
    visited: List[Tuple[int, int]]
    expanded: int
    runtime_ms: float


class RenderResponseModel(BaseModel):
    found: bool
    cost: Optional[int]
    overlay: List[str]


def _build_grid(model: GridModel) -> Grid:
    if (model.rows is None) == (model.lines is None):
        raise InvalidProblemError("provide exactly one of grid.rows or grid.lines")
    if model.rows is not None:
        return Grid.from_rows(model.rows)
    return Grid.from_lines(model.lines)


def _state_model(s: State) -> StateModel:
    return StateModel(x=s.position[0], y=s.position[1], heading=s.heading.value, run=s.run)


def _execute(req: RunRequestModel, force_path: bool = False) -> Tuple[Grid, AlgorithmResult, float]:
    algo = REGISTRY.get(req.algorithm_id)
    if algo is None:
        raise HTTPException(status_code=404, detail=f"Unknown algorithm_id: {req.algorithm_id}")

    opts = req.options or RunOptionsModel()
    try:
        grid = _build_grid(req.grid)
        validate_run_bounds(opts.min_run, opts.max_run)
        problem = RouteProblem(grid=grid)
    except InvalidProblemError as e:
        logger.warning("Rejected request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    run_opts = RunOptions(
        min_run=opts.min_run,
        max_run=opts.max_run,
        lookahead=opts.lookahead,
        return_path=opts.return_path or force_path,
        return_visited=opts.return_visited,
        max_visited=opts.max_visited,
    )

    t0 = time.perf_counter()
    try:
        result = algo.run(problem, run_opts)
    except Exception as e:
        logger.exception("Algorithm %s crashed", req.algorithm_id)
        raise HTTPException(status_code=500, detail=f"Algorithm crashed: {type(e).__name__}: {e}")
    t1 = time.perf_counter()

    return grid, result, (t1 - t0) * 1000.0


@app.get("/api/health")
def health():
    return {"ok": True, "algorithms": len(REGISTRY)}


@app.get("/api/algorithms", response_model=list[AlgorithmInfo])
def algorithms() -> list[AlgorithmInfo]:
    out: list[AlgorithmInfo] = []
    for spec in list_algorithms(REGISTRY):
        out.append(AlgorithmInfo(id=spec.id, name=spec.name, description=spec.description))
    return out


@app.post("/api/run", response_model=RunResponseModel)
def run(req: RunRequestModel) -> RunResponseModel:
    _, result, runtime_ms = _execute(req)
    return RunResponseModel(
        found=result.found,
        cost=result.cost,
        path=[_state_model(s) for s in result.path],
        visited=result.visited,
        expanded=int(result.expanded),
        runtime_ms=runtime_ms,
    )


@app.post("/api/render", response_model=RenderResponseModel)
def render(req: RunRequestModel) -> RenderResponseModel:
    grid, result, _ = _execute(req, force_path=True)
    return RenderResponseModel(
        found=result.found,
        cost=result.cost,
        overlay=overlay_path(grid, result.path) if result.found else grid.to_lines(),
    )
