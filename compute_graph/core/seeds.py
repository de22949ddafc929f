# compute_graph/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List
import numpy as np

from .node import Node, Var, as_node
from .engine import forward, backward


def value(x: Any) -> Any:
    """Return the numeric value of a Node; pass through plain numbers unchanged."""
    return x.value if isinstance(x, Node) else x


def _run(y: Any) -> Node:
    y = as_node(y)
    forward(y)
    backward(y)
    return y


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Var], Node], x0: float) -> np.float64:
    """
    Derivative of a scalar function y=f(x) at x0.
    Builds a fresh graph on every call.
    """
    x = Var(x0, name="x")
    _run(f(x))
    return x.grad


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Var]], Node],
          inputs: Dict[str, float]) -> Dict[str, np.float64]:
    """
    Gradient of y=f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE backward pass to obtain all ∂y/∂var simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: Var} and returning a Node
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: number}  # gradients in the same key order as `inputs`
    """
    vars_ = {k: Var(v, name=k) for k, v in inputs.items()}
    _run(f(vars_))
    return {k: vars_[k].grad for k in inputs.keys()}


def grads_list(f: Callable[[List[Var]], Node],
               x0_list: Iterable[float]) -> List[np.float64]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    xs = [Var(v, name=f"x{i}") for i, v in enumerate(x0_list)]
    _run(f(xs))
    return [x.grad for x in xs]


def numerical_grad(f: Callable[[Var], Node], x0: float, eps: float = 1e-5) -> float:
    """Central finite difference (f(x0+eps) - f(x0-eps)) / 2eps, for checking grad()."""
    hi = float(_run(f(Var(x0 + eps))).value)
    lo = float(_run(f(Var(x0 - eps))).value)
    return (hi - lo) / (2.0 * eps)
