import math

import pytest

from compute_graph import Var, exp, grad, grads, grads_list, numerical_grad, sin, value


def test_value_passthrough():
    assert value(3.5) == 3.5
    assert value(Var(2.0)) == 2.0


def test_grad_single_input():
    assert grad(lambda x: x ** 3, 2.0) == pytest.approx(12.0)
    assert grad(lambda x: sin(x) * exp(x), 0.5) == pytest.approx(
        (math.cos(0.5) + math.sin(0.5)) * math.exp(0.5))


def test_grads_dict():
    g = grads(lambda v: v["a"] * v["b"] + sin(v["a"]), {"a": 1.0, "b": 4.0})
    assert list(g) == ["a", "b"]
    assert g["a"] == pytest.approx(4.0 + math.cos(1.0))
    assert g["b"] == pytest.approx(1.0)


def test_grads_list():
    assert grads_list(lambda xs: xs[0] * xs[0] + 3 * xs[1], [2.0, 4.0]) == [4.0, 3.0]


def test_grads_of_constant_function():
    # f ignores its input; the result is wrapped as a Const root
    assert grads_list(lambda xs: 7.0, [1.0]) == [0.0]


def test_numerical_grad_agrees():
    f = lambda x: x * exp(-x * x)
    for x0 in (-1.3, 0.0, 0.4, 2.0):
        assert grad(f, x0) == pytest.approx(numerical_grad(f, x0), rel=1e-6, abs=1e-9)
