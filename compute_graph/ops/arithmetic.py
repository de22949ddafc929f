# compute_graph/ops/arithmetic.py
import numpy as np
from ..core.node import Node, as_node


def binary_op(f, dfda, dfdb, tag):
    """
    Build a constructor for a two-input node:
      - eval  : f(a, b)
      - diff  : [∂f/∂a, ∂f/∂b] evaluated at the children's current values
    Plain numbers given to the constructor are wrapped as Const.
    """
    def make(x, y):
        return Node(lambda p: f(p[0], p[1]),
                    lambda p: [dfda(p[0], p[1]), dfdb(p[0], p[1])],
                    as_node(x), as_node(y), op_tag=tag)
    make.__name__ = tag
    return make


def unary_op(f, dfdx, tag):
    """Build a constructor for a one-input node: eval f(x), diff [f'(x)]."""
    def make(x):
        return Node(lambda p: f(p[0]), lambda p: [dfdx(p[0])], as_node(x), op_tag=tag)
    make.__name__ = tag
    return make


add = binary_op(lambda a, b: a + b, lambda a, b: 1.0,     lambda a, b: 1.0,              "add")
sub = binary_op(lambda a, b: a - b, lambda a, b: 1.0,     lambda a, b: -1.0,             "sub")
mul = binary_op(lambda a, b: a * b, lambda a, b: b,       lambda a, b: a,                "mul")
div = binary_op(lambda a, b: a / b, lambda a, b: 1.0 / b, lambda a, b: -a / np.square(b), "div")

# ∂(a^b)/∂b = ln(a) * a^b ; nan for a <= 0, left to propagate
pow = binary_op(np.power,
                lambda a, b: b * np.power(a, b - 1.0),
                lambda a, b: np.log(a) * np.power(a, b),
                "pow")

neg = unary_op(lambda x: -x, lambda x: -1.0, "neg")
square = unary_op(lambda x: x * x, lambda x: 2.0 * x, "square")
