# compute_graph/core/graph.py
from __future__ import annotations
import numpy as np
from typing import Iterator, List, Sequence

from .engine import _child_values, assign, propagate, topological_order
from .node import Node, Var


class ComputeGraph:
    """
    A fixed set of roots plus the topological order of everything they reach.

    The order is computed once at construction: children are fixed when a
    node is built, so the reachable subgraph cannot change afterwards. Nodes
    built on top of it later only add parents outside the reachable set.

        x, y = Var(3.0), Var(2.0)
        g = ComputeGraph(x * x + 4 * y * y)
        g.forward(); g.backward()
        g.gradients([x, y])   # array([ 6., 16.])
    """

    def __init__(self, *roots: Node):
        self.roots: List[Node] = list(roots)
        self.sorted_nodes: List[Node] = topological_order(*roots)
        self.target: Node = self.roots[0]

    def __len__(self):
        return len(self.sorted_nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.sorted_nodes)

    def __repr__(self):
        return f"ComputeGraph(nodes={len(self)}, roots={len(self.roots)})"

    def forward(self):
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            for node in reversed(self.sorted_nodes):
                node.value = np.float64(node.eval_fn(_child_values(node)))

    def backward(self):
        propagate(self.sorted_nodes, self.roots)

    def eval(self, variables: Sequence[Var], values: Sequence[float]):
        """Assign, then forward, then backward."""
        assign(variables, values)
        self.forward()
        self.backward()

    def values(self, variables: Sequence[Node]) -> np.ndarray:
        return np.array([float(v.value) for v in variables], dtype=float)

    def gradients(self, variables: Sequence[Node]) -> np.ndarray:
        return np.array([float(v.grad) for v in variables], dtype=float)

