# compute_graph/__init__.py
# Scalar compute graph with reverse-mode differentiation

from .core import (
    GraphError,
    GraphCycleError,
    ArityError,
    Node,
    Const,
    Var,
    ComputeGraph,
    forward,
    backward,
    evaluate,
    topological_order,
    zero_grads,
    grad,
    grads,
    grads_list,
    numerical_grad,
    value,
)

from . import ops
from .ops import (
    binary_op, unary_op,
    add, sub, mul, div, neg, pow, square,
    sin, cos, tan, exp, log, ln,
)

from . import train
from .train import (
    SGD, Momentum, AdaGrad, RMSprop, Adam,
    TrainConfig, MinimizeConfig,
    train as fit,
    minimize,
)

__all__ = [
    # Core
    'GraphError', 'GraphCycleError', 'ArityError',
    'Node', 'Const', 'Var', 'ComputeGraph',
    'forward', 'backward', 'evaluate', 'topological_order', 'zero_grads',
    'grad', 'grads', 'grads_list', 'numerical_grad', 'value',
    # Ops
    'ops',
    'binary_op', 'unary_op',
    'add', 'sub', 'mul', 'div', 'neg', 'pow', 'square',
    'sin', 'cos', 'tan', 'exp', 'log', 'ln',
    # Training
    'train', 'fit',
    'SGD', 'Momentum', 'AdaGrad', 'RMSprop', 'Adam',
    'TrainConfig', 'MinimizeConfig',
    'minimize',
]
