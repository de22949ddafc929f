# compute_graph/core/engine.py
from __future__ import annotations
import numpy as np
from collections import deque
from typing import Dict, List, Sequence

from .errors import ArityError, GraphCycleError
from .node import Node, Var


def _check_roots(roots: Sequence[Node]) -> None:
    if not roots:
        raise ValueError("at least one root node is required")
    for r in roots:
        if not isinstance(r, Node):
            raise TypeError(f"roots must be Node instances, got {type(r)}")


def _child_values(node: Node) -> List[np.float64]:
    return [np.float64(c.value) for c in node.children]


def reachable(*roots: Node) -> List[Node]:
    """
    Every node reachable from `roots` through `children`, in post-order
    (children before the nodes that consume them).

    Uses an explicit stack, so graph depth is not limited by the interpreter's
    recursion limit. A node met again while still on the current path is a
    cycle and raises GraphCycleError.
    """
    _check_roots(roots)
    order: List[Node] = []
    done = set()
    on_path = set()
    for root in roots:
        if id(root) in done:
            continue
        stack = [(root, iter(root.children))]
        on_path.add(id(root))
        while stack:
            node, it = stack[-1]
            child = next(it, None)
            if child is None:
                stack.pop()
                on_path.discard(id(node))
                done.add(id(node))
                order.append(node)
                continue
            if id(child) in on_path:
                raise GraphCycleError(child)
            if id(child) not in done:
                on_path.add(id(child))
                stack.append((child, iter(child.children)))
    return order


def _consumer_counts(nodes: Sequence[Node]) -> Dict[int, int]:
    """Number of reachable parent edges for each node (with multiplicity)."""
    members = {id(n) for n in nodes}
    return {id(n): sum(1 for p in n.parents if id(p) in members) for n in nodes}


def topological_order(*roots: Node) -> List[Node]:
    """
    Order the reachable nodes root-first: a node appears only after every
    reachable parent has appeared.

    Kahn's algorithm over the reverse edges, with each node's consumer count
    as its ready-counter.
    """
    nodes = reachable(*roots)
    pending = _consumer_counts(nodes)
    ready = deque(n for n in reversed(nodes) if pending[id(n)] == 0)
    order: List[Node] = []
    while ready:
        cur = ready.popleft()
        order.append(cur)
        for c in cur.children:
            pending[id(c)] -= 1
            if pending[id(c)] == 0:
                ready.append(c)
    if len(order) != len(nodes):
        # unreachable for graphs built by constructors; reachable() catches cycles first
        stuck = next(n for n in nodes if pending[id(n)] > 0)
        raise GraphCycleError(stuck)
    return order


def forward(*roots: Node) -> None:
    """
    Compute `value` for every node reachable from `roots`.

    Each node is evaluated once, after all of its children. Repeated calls
    without changing any Var give identical values.
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for node in reachable(*roots):
            node.value = np.float64(node.eval_fn(_child_values(node)))


def zero_grads(*roots: Node) -> None:
    """Set `grad` to zero on every node reachable from `roots`."""
    for node in reachable(*roots):
        node.grad = np.float64(0.0)


def propagate(order: Sequence[Node], roots: Sequence[Node]) -> None:
    """
    Reset, seed and push adjoints through `order`, which must list every
    node after all of its parents inside `order`.

    For each node: child_i.grad += node.grad * ∂node/∂child_i.
    """
    for node in order:
        node.grad = np.float64(0.0)
    for r in roots:
        r.grad = np.float64(1.0)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for node in order:
            local = list(node.diff_fn(_child_values(node)))
            if len(local) != len(node.children):
                raise ArityError(node, len(local))
            for child, d in zip(node.children, local):
                child.grad = child.grad + np.float64(d) * node.grad


def backward(*roots: Node) -> List[Node]:
    """
    Reverse-mode pass: afterwards every reachable node holds ∂roots/∂node in
    `grad` (summed over all roots when several are given).

    Uses the values of the last forward pass. Returns the processing order.
    """
    order = topological_order(*roots)
    propagate(order, roots)
    return order


def assign(variables: Sequence[Var], values: Sequence[float]) -> None:
    """Write `values` into the matching `variables`."""
    if len(variables) != len(values):
        raise ValueError(
            f"got {len(variables)} variables but {len(values)} values"
        )
    for v, x in zip(variables, values):
        v.value = np.float64(x)


def evaluate(root: Node, variables: Sequence[Var], values: Sequence[float]) -> None:
    """Assign `values` to `variables`, then run forward and backward from `root`."""
    assign(variables, values)
    forward(root)
    backward(root)
