from __future__ import annotations

import importlib
import logging
import pkgutil
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .types import AlgorithmResult, AlgorithmSpec, RouteProblem, RunOptions

logger = logging.getLogger(__name__)

Solver = Callable[[RouteProblem, RunOptions], AlgorithmResult]

DEFAULT_PLUGIN_PACKAGE = __package__ + '.plugins'


@dataclass
class LoadedAlgorithm:
    spec: AlgorithmSpec
    run: Solver
    module: str


def load_plugins(package_name: Optional[str] = None) -> Dict[str, LoadedAlgorithm]:
    """Import every solver module in ``package_name`` and index it by id.

    A solver module defines ``ALGORITHM`` (an :class:`AlgorithmSpec`) and a
    callable ``run(problem, options)``. Modules whose name starts with an
    underscore are private helpers and are not imported; modules missing
    either attribute are logged and skipped.

    Raises
    ------
    TypeError
        ``ALGORITHM`` is not an AlgorithmSpec, or ``run`` is not callable.
    ValueError
        Two modules claim the same id.
    """

    package_name = package_name or DEFAULT_PLUGIN_PACKAGE
    package = importlib.import_module(package_name)
    registry: Dict[str, LoadedAlgorithm] = {}

    for info in pkgutil.iter_modules(package.__path__):
        if info.name.startswith('_'):
            continue
        qualified = f"{package_name}.{info.name}"
        module = importlib.import_module(qualified)
        spec = getattr(module, 'ALGORITHM', None)
        solver = getattr(module, 'run', None)
        if spec is None or solver is None:
            logger.warning("Skipping %s: it needs both ALGORITHM and run()", qualified)
            continue
        if not isinstance(spec, AlgorithmSpec):
            raise TypeError(f"{qualified}.ALGORITHM must be an AlgorithmSpec, got {type(spec).__name__}")
        if not callable(solver):
            raise TypeError(f"{qualified}.run must be callable")
        if spec.id in registry:
            raise ValueError(
                f"Solver id {spec.id!r} is claimed by both {registry[spec.id].module} and {qualified}"
            )
        registry[spec.id] = LoadedAlgorithm(spec=spec, run=solver, module=qualified)
        logger.debug("Registered solver %s from %s", spec.id, qualified)

    return registry


def list_algorithms(registry: Dict[str, LoadedAlgorithm]) -> List[AlgorithmSpec]:
    return [registry[k].spec for k in sorted(registry)]
