# compute_graph/ops/transcendental.py
import numpy as np
from .arithmetic import unary_op

sin = unary_op(np.sin, np.cos, "sin")
cos = unary_op(np.cos, lambda x: -np.sin(x), "cos")
tan = unary_op(np.tan, lambda x: 1.0 / np.square(np.cos(x)), "tan")
exp = unary_op(np.exp, np.exp, "exp")
log = unary_op(np.log, lambda x: 1.0 / x, "log")

ln = log
