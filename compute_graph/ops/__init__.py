# compute_graph/ops/__init__.py

# Convenience re-exports so users can do: from compute_graph.ops import mul, exp, ...
from .arithmetic import binary_op, unary_op, add, sub, mul, div, neg, pow, square
from .transcendental import sin, cos, tan, exp, log, ln

__all__ = [
    "binary_op", "unary_op",
    "add", "sub", "mul", "div", "neg", "pow", "square",
    "sin", "cos", "tan", "exp", "log", "ln",
]
