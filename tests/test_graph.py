import numpy as np
import pytest

from compute_graph import ComputeGraph, Const, Var, cos
from compute_graph.core import reachable


def _quadratic():
    x, y = Var(3.0), Var(2.0)
    z = x * x + Const(4) * y * y
    return x, y, z


def test_graph_caches_root_first_order():
    x, y, z = _quadratic()
    g = ComputeGraph(z)
    assert g.target is z
    assert g.sorted_nodes[0] is z
    assert len(g) == 7
    assert {id(n) for n in g} == {id(n) for n in reachable(z)}
    assert not g.sorted_nodes[-1].children


def test_forward_backward():
    x, y, z = _quadratic()
    g = ComputeGraph(z)
    g.forward()
    g.backward()
    assert z.value == 25.0
    np.testing.assert_allclose(g.gradients([x, y]), [6.0, 16.0])
    np.testing.assert_allclose(g.values([x, y]), [3.0, 2.0])


def test_eval_with_assignment():
    x, y, z = _quadratic()
    g = ComputeGraph(z)
    g.eval([x, y], [10.0, 20.0])
    assert z.value == 100.0 + 1600.0
    np.testing.assert_allclose(g.gradients([x, y]), [20.0, 160.0])

    with pytest.raises(ValueError):
        g.eval([x, y], [1.0, 2.0, 3.0])


def test_reused_across_iterations():
    x = Var(0.0)
    g = ComputeGraph(cos(x) * x)
    for x0 in np.linspace(-1.0, 1.0, 5):
        g.eval([x], [x0])
        assert float(x.grad) == pytest.approx(np.cos(x0) - x0 * np.sin(x0))


def test_nodes_built_later_do_not_disturb_cached_order():
    x, y, z = _quadratic()
    g = ComputeGraph(z)
    outside = z * 2 + x
    g.forward()
    g.backward()
    assert z.grad == 1.0
    assert x.grad == 6.0
    assert outside.grad == 0.0


def test_multi_root_graph():
    x = Var(1.0)
    a = x * 5
    b = x * x
    g = ComputeGraph(a, b)
    assert g.target is a
    g.forward()
    g.backward()
    assert x.grad == 5.0 + 2.0


def test_graph_requires_a_root():
    with pytest.raises(ValueError):
        ComputeGraph()
