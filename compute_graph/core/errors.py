# compute_graph/core/errors.py
"""Typed errors raised by graph traversal."""


class GraphError(ValueError):
    """Base class for malformed-graph errors."""


class GraphCycleError(GraphError):
    """A node was reached again while still on the traversal path."""

    def __init__(self, node):
        super().__init__(f"cycle detected at {node!r}")
        self.node = node


class ArityError(GraphError):
    """A node's diff returned a number of partials different from its children."""

    def __init__(self, node, n_partials: int):
        super().__init__(
            f"{node.op_tag} node has {len(node.children)} children "
            f"but diff returned {n_partials} partials"
        )
        self.node = node
        self.n_partials = n_partials
