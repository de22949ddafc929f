# compute_graph/core/__init__.py

"""
Core public API of the compute-graph engine.

Exports:
    Node, Const, Var  : graph nodes (operations and leaves).
    ComputeGraph      : roots plus a cached topological order.
    forward           : evaluate every node reachable from the roots.
    backward          : reverse-mode pass filling `grad` on reachable nodes.
    evaluate          : assign variables, then forward and backward.
    topological_order : root-first processing order used by backward.
    grad, grads, value: functional convenience wrappers.
"""

from .errors import GraphError, GraphCycleError, ArityError
from .node import Node, Const, Var, as_node
from .engine import (
    reachable,
    topological_order,
    forward,
    backward,
    zero_grads,
    assign,
    evaluate,
)
from .graph import ComputeGraph
from .seeds import grad, grads, grads_list, numerical_grad, value

__all__ = [
    "GraphError", "GraphCycleError", "ArityError",
    "Node", "Const", "Var", "as_node",
    "reachable", "topological_order",
    "forward", "backward", "zero_grads", "assign", "evaluate",
    "ComputeGraph",
    "grad", "grads", "grads_list", "numerical_grad", "value",
]
