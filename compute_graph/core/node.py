# compute_graph/core/node.py
from __future__ import annotations
import numpy as np
from typing import Callable, List, Optional, Sequence

EvalFn = Callable[[Sequence[float]], float]
DiffFn = Callable[[Sequence[float]], Sequence[float]]


class Node:
    """
    One scalar operation in the compute graph.

    Attributes
    ----------
    value : np.float64
        Last output computed by a forward pass (0 until then).
    grad : np.float64
        Accumulated ∂root/∂node from the last backward pass.
    children : List[Node]
        Ordered inputs. The order indexes into the output of `diff_fn`.
    parents : List[Node]
        Consumers of this node. A node used twice by the same consumer
        (e.g. `x * x`) lists that consumer twice.
    eval_fn : callable(values) -> value
        Output of this op given the children's current values.
    diff_fn : callable(values) -> [∂node/∂child_0, ∂node/∂child_1, ...]
        Local partials at the children's current values.
    op_tag : str
        Debug tag (e.g., "add", "var").
    """

    def __init__(self, eval_fn: EvalFn, diff_fn: DiffFn, *children: "Node", op_tag: str = "op"):
        self.value = np.float64(0.0)
        self.grad = np.float64(0.0)
        self.children: List[Node] = []
        self.parents: List[Node] = []
        self.eval_fn = eval_fn
        self.diff_fn = diff_fn
        self.op_tag = op_tag

        for child in children:
            if not isinstance(child, Node):
                raise TypeError(f"children must be Node instances, got {type(child)}")
            self.children.append(child)
            child.parents.append(self)

    def __repr__(self):
        return f"{type(self).__name__}({self.op_tag}, value={float(self.value):.4f}, grad={float(self.grad):.4f})"

    def to_graph(self):
        from .graph import ComputeGraph
        return ComputeGraph(self)

    def square(self):
        from ..ops.arithmetic import square
        return square(self)

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(other, self)


def _no_partials(values):
    return []


class Const(Node):
    """Leaf holding a fixed number."""

    def __init__(self, c):
        c = np.float64(c)
        super().__init__(lambda values: c, _no_partials, op_tag="const")
        self.c = c


class Var(Node):
    """
    Leaf whose value is driven from outside (by the caller or an optimizer).
    Forward evaluation returns the current value unchanged.
    """

    def __init__(self, initial=0.0, name: Optional[str] = None):
        super().__init__(lambda values: self.value, _no_partials, op_tag="var")
        self.value = np.float64(initial)
        self.name = name

    def __repr__(self):
        return f"Var({float(self.value)!r}, grad={float(self.grad):.4f}, name={self.name!r})"


def as_node(x) -> Node:
    """Ensure x is a Node; otherwise wrap it as a Const."""
    if isinstance(x, Node):
        return x
    if isinstance(x, (bool, np.bool_)) or not isinstance(x, (int, float, np.integer, np.floating)):
        raise TypeError(f"expected a Node or a real number, got {type(x)}")
    return Const(x)
