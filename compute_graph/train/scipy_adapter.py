"""
Drive a compute graph with scipy.optimize.

The graph's target is the objective; one forward and one backward pass give
its value and its analytic gradient, passed to scipy with `jac=True`.
"""

from typing import Optional, Sequence, Union

import numpy as np
from scipy.optimize import minimize as _scipy_minimize, OptimizeResult

from ..core.graph import ComputeGraph
from ..core.node import Node, Var
from .config import MinimizeConfig


def minimize(graph: Union[ComputeGraph, Node],
             variables: Sequence[Var],
             config: Optional[MinimizeConfig] = None) -> OptimizeResult:
    """
    Minimize the graph's target over `variables`, starting from their
    current values.

    Args:
        graph: ComputeGraph, or a root Node to build one from
        variables: Var leaves to optimize
        config: scipy method and tolerances (uses defaults if None)

    Returns:
        scipy OptimizeResult. The variables are left at `result.x` and the
        graph is evaluated there.
    """
    config = config or MinimizeConfig()
    if not isinstance(graph, ComputeGraph):
        graph = ComputeGraph(graph)
    target = graph.target

    def objective(x: np.ndarray):
        graph.eval(variables, x)
        return float(target.value), graph.gradients(variables)

    result = _scipy_minimize(
        objective,
        graph.values(variables),
        jac=True,
        method=config.method,
        tol=config.tolerance,
        options={'maxiter': config.max_iterations},
    )

    graph.eval(variables, result.x)

    if config.verbose:
        print(f"  {config.method}: {result.message} "
              f"(nit={result.get('nit')}, fun={float(result.fun):.6e})")

    return result
