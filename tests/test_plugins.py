from __future__ import annotations

import pytest

from crucible.algorithms.loader import list_algorithms, load_plugins
from crucible.algorithms.types import AlgorithmResult, Grid, RouteProblem, RunOptions, SearchStatus

from conftest import assert_legal_route, uniform


@pytest.fixture(scope="module")
def registry():
    return load_plugins()


def test_registry_ids(registry):
    assert [spec.id for spec in list_algorithms(registry)] == ["crucible_astar", "crucible_ucs", "dijkstra"]


@pytest.mark.parametrize("algo_id", ["crucible_astar", "crucible_ucs"])
def test_constrained_plugins_agree(registry, sample_grid, algo_id):
    run = registry[algo_id].run
    assert run(RouteProblem(sample_grid), RunOptions(min_run=1, max_run=3)).cost == 102
    result = run(RouteProblem(sample_grid), RunOptions(min_run=4, max_run=10, return_path=True))
    assert result.found
    assert result.cost == 94
    assert_legal_route(sample_grid, result.path, 94, 4, 10)


@pytest.mark.parametrize("algo_id", ["crucible_astar", "crucible_ucs"])
def test_exhaustion_is_reported_without_a_sentinel_cost(registry, algo_id):
    result = registry[algo_id].run(RouteProblem(uniform(3, 3)), RunOptions(min_run=4, max_run=10))
    assert isinstance(result, AlgorithmResult)
    assert result.status is SearchStatus.EXHAUSTED
    assert not result.found
    assert result.cost is None
    assert result.path == []


def test_heuristic_saves_work(registry, sample_grid):
    opts = RunOptions(min_run=4, max_run=10)
    astar = registry["crucible_astar"].run(RouteProblem(sample_grid), opts)
    ucs = registry["crucible_ucs"].run(RouteProblem(sample_grid), opts)
    assert astar.expanded < ucs.expanded


def test_dijkstra_ignores_run_limits(registry):
    grid = uniform(5, 1)
    result = registry["dijkstra"].run(RouteProblem(grid), RunOptions(min_run=1, max_run=3, return_path=True))
    assert result.found
    assert result.cost == 4
    assert [s.run for s in result.path] == [1, 2, 3, 4]


def test_dijkstra_visited_cap(registry, sample_grid):
    result = registry["dijkstra"].run(RouteProblem(sample_grid), RunOptions(return_visited=True, max_visited=5))
    assert len(result.visited) == 5
    assert result.visited[0] == (0, 0)


def test_plugins_honour_custom_goal(registry):
    grid = Grid.from_lines(["111", "191", "111"])
    problem = RouteProblem(grid, goal=(2, 0))
    for algo_id in ("crucible_astar", "crucible_ucs", "dijkstra"):
        assert registry[algo_id].run(problem, RunOptions(min_run=1, max_run=3)).cost == 2


SOLVER_SOURCE = '''
from crucible.algorithms.types import AlgorithmResult, AlgorithmSpec, SearchStatus

ALGORITHM = AlgorithmSpec(id={id!r}, name="Fixed")


def run(problem, options):
    return AlgorithmResult(status=SearchStatus.FOUND, cost=0)
'''


def _make_package(tmp_path, monkeypatch, name, modules):
    pkg = tmp_path / name
    pkg.mkdir()
    for module_name, source in modules.items():
        (pkg / f"{module_name}.py").write_text(source)
    monkeypatch.syspath_prepend(str(tmp_path))
    return name


def test_loads_from_another_package(tmp_path, monkeypatch):
    name = _make_package(
        tmp_path,
        monkeypatch,
        "extra_solvers_ok",
        {
            "fixed": SOLVER_SOURCE.format(id="fixed"),
            "_helpers": "VALUE = 1\n",
            "notes": "TEXT = 'no solver here'\n",
        },
    )
    registry = load_plugins(name)
    assert list(registry) == ["fixed"]
    assert registry["fixed"].module == "extra_solvers_ok.fixed"
    assert registry["fixed"].run(None, RunOptions()).cost == 0


def test_duplicate_ids_are_rejected(tmp_path, monkeypatch):
    name = _make_package(
        tmp_path,
        monkeypatch,
        "extra_solvers_dup",
        {"first": SOLVER_SOURCE.format(id="same"), "second": SOLVER_SOURCE.format(id="same")},
    )
    with pytest.raises(ValueError, match="same"):
        load_plugins(name)


def test_spec_must_be_an_algorithm_spec(tmp_path, monkeypatch):
    name = _make_package(
        tmp_path,
        monkeypatch,
        "extra_solvers_badspec",
        {"bad": "ALGORITHM = {'id': 'bad'}\n\ndef run(problem, options):\n    return None\n"},
    )
    with pytest.raises(TypeError):
        load_plugins(name)


def test_run_must_be_callable(tmp_path, monkeypatch):
    source = "from crucible.algorithms.types import AlgorithmSpec\n\nALGORITHM = AlgorithmSpec(id='x', name='X')\nrun = 3\n"
    name = _make_package(tmp_path, monkeypatch, "extra_solvers_badrun", {"bad": source})
    with pytest.raises(TypeError):
        load_plugins(name)
