"""
Training loop and end conditions.

An end condition is any callable `(iteration, root, variables) -> bool`;
an optimizer is any callable `(iteration, root, variables) -> None` or an
`Optimizer` instance, whose state the loop creates and threads explicitly.
"""

from typing import Callable, Optional, Sequence, Union

from ..core.graph import ComputeGraph
from ..core.node import Node, Var
from .config import TrainConfig, TrainResult
from .optimizers import Optimizer

EndCondition = Callable[[int, Node, Sequence[Var]], bool]


def value_below(threshold: float) -> EndCondition:
    """Stop once the objective is strictly below `threshold`."""
    def cond(iteration, root, variables):
        return root.value < threshold
    return cond


def max_iterations(n: int) -> EndCondition:
    """Stop at iteration `n` (iterations count from 1)."""
    def cond(iteration, root, variables):
        return iteration >= n
    return cond


def any_of(*conditions: EndCondition) -> EndCondition:
    def cond(iteration, root, variables):
        return any(c(iteration, root, variables) for c in conditions)
    return cond


def train(graph: Union[ComputeGraph, Node],
          variables: Sequence[Var],
          optimizer: Union[Optimizer, Callable],
          end_condition: EndCondition,
          config: Optional[TrainConfig] = None) -> TrainResult:
    """
    Minimize the graph's target by repeated descent steps.

    Each iteration runs forward, then backward, then checks `end_condition`
    and, if not done, applies `optimizer`. Iterations count from 1.

    Args:
        graph: ComputeGraph, or a root Node to build one from
        variables: Var leaves the optimizer updates
        optimizer: Optimizer instance or (iteration, root, variables) callable
        end_condition: (iteration, root, variables) -> bool
        config: loop settings (uses defaults if None)

    Returns:
        TrainResult; `converged` is False when max_iterations stopped the loop
    """
    config = config or TrainConfig()
    if not isinstance(graph, ComputeGraph):
        graph = ComputeGraph(graph)
    target = graph.target

    if isinstance(optimizer, Optimizer):
        state = optimizer.init_state(variables)

        def apply(iteration):
            optimizer.step(iteration, target, variables, state)
    else:
        def apply(iteration):
            optimizer(iteration, target, variables)

    history = []
    iteration = 1
    converged = False
    while True:
        graph.forward()
        graph.backward()
        history.append(float(target.value))

        if config.verbose and iteration % config.log_every == 0:
            print(f"  Iteration {iteration}: Loss = {float(target.value):.6e}")

        if end_condition(iteration, target, variables):
            converged = True
            break
        if iteration >= config.max_iterations:
            break

        apply(iteration)
        iteration += 1

    if config.verbose:
        status = "converged" if converged else "stopped at max_iterations"
        print(f"  {status} after {iteration} iterations: Loss = {float(target.value):.6e}")

    return TrainResult(
        iterations=iteration,
        value=float(target.value),
        converged=converged,
        history=history,
    )
