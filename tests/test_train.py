import numpy as np
import pytest

from compute_graph import ComputeGraph, Const, Var
from compute_graph.train import (
    SGD, Momentum, AdaGrad, RMSprop, Adam,
    MinimizeConfig, TrainConfig, TrainResult,
    any_of, max_iterations, minimize, train, value_below,
)

end_condition = value_below(1e-3)


def _problem():
    x = Var(10.0)
    y = Var(20.0)
    z = x * x + Const(4) * y * y
    return x, y, z


@pytest.mark.parametrize("make_optimizer", [
    SGD,
    Momentum,
    lambda: AdaGrad(1.0),
    RMSprop,
    Adam,
], ids=["sgd", "momentum", "adagrad", "rmsprop", "adam"])
def test_optimizers_converge(make_optimizer):
    x, y, z = _problem()
    result = train(z, [x, y], make_optimizer(), end_condition)
    assert isinstance(result, TrainResult)
    assert result.converged
    assert z.value < 1e-3
    assert result.value == float(z.value)
    assert result.iterations < 100_000
    assert len(result.history) == result.iterations


@pytest.mark.parametrize("make_optimizer", [SGD, Momentum, RMSprop, Adam])
def test_optimizer_as_plain_callable(make_optimizer):
    x, y, z = _problem()
    opt = make_optimizer()
    result = train(ComputeGraph(z), [x, y], opt, end_condition)
    assert result.converged

    # the same instance used through the three-argument form keeps its own state
    x2, y2, z2 = _problem()
    result2 = train(z2, [x2, y2], lambda i, r, vs: opt(i, r, vs), end_condition)
    assert result2.converged


def test_explicit_state_is_not_stored_on_optimizer():
    x, y, z = _problem()
    opt = Adam()
    train(z, [x, y], opt, max_iterations(10))
    assert opt._state is None


def test_end_condition_checked_before_first_step():
    x, y, z = _problem()
    result = train(z, [x, y], SGD(), max_iterations(1))
    assert result.iterations == 1
    assert x.value == 10.0 and y.value == 20.0
    assert x.grad == 20.0 and y.grad == 160.0


def test_max_iterations_guard():
    x, y, z = _problem()
    never = lambda i, r, vs: False
    result = train(z, [x, y], SGD(1e-6), never, TrainConfig(max_iterations=5))
    assert not result.converged
    assert result.iterations == 5
    assert len(result.history) == 5
    assert result.history == sorted(result.history, reverse=True)


def test_any_of():
    x, y, z = _problem()
    result = train(z, [x, y], SGD(), any_of(value_below(-1.0), max_iterations(3)))
    assert result.iterations == 3


def test_verbose_prints_progress(capsys):
    x, y, z = _problem()
    train(z, [x, y], SGD(), max_iterations(4), TrainConfig(verbose=True, log_every=2))
    out = capsys.readouterr().out
    assert "Iteration 2:" in out
    assert "Iteration 4:" in out
    assert "converged after 4 iterations" in out


def test_config_validation():
    with pytest.raises(ValueError):
        TrainConfig(max_iterations=0)
    with pytest.raises(ValueError):
        TrainConfig(log_every=0)
    with pytest.raises(ValueError):
        SGD(lr=0.0)
    with pytest.raises(ValueError):
        Adam(beta2=1.0)
    with pytest.raises(ValueError):
        Momentum(momentum=-0.1)


def _single(grad, value=1.0):
    v = Var(value)
    v.grad = np.float64(grad)
    return v


def test_sgd_halves_lr_when_objective_stalls():
    root = Var(5.0)
    v = _single(1.0)
    opt = SGD(lr=0.1)
    state = opt.init_state([v])

    opt.step(1, root, [v], state)
    assert float(v.value) == pytest.approx(0.9)
    assert state.lr == 0.1

    root.value = np.float64(4.0)
    opt.step(2, root, [v], state)
    assert state.lr == 0.1

    root.value = np.float64(4.0)
    opt.step(3, root, [v], state)
    assert state.lr == 0.05
    assert float(v.value) == pytest.approx(0.7)


def test_momentum_first_step():
    v = _single(2.0)
    opt = Momentum(lr=0.1, momentum=0.9)
    state = opt.init_state([v])
    opt.step(1, Var(0.0), [v], state)
    assert state.velocity[0] == pytest.approx(0.2)
    assert float(v.value) == pytest.approx(1.0 - 0.02)


def test_adagrad_accumulates():
    v = _single(3.0)
    opt = AdaGrad(lr=1.0)
    state = opt.init_state([v])
    opt.step(1, Var(0.0), [v], state)
    opt.step(2, Var(0.0), [v], state)
    assert state.sq_grad[0] == pytest.approx(18.0)
    assert float(v.value) == pytest.approx(1.0 - 1.0 - 3.0 / np.sqrt(18.0), rel=1e-6)


def test_rmsprop_first_step():
    v = _single(2.0)
    opt = RMSprop(lr=0.01, beta=0.9)
    state = opt.init_state([v])
    opt.step(1, Var(0.0), [v], state)
    assert state.sq_grad[0] == pytest.approx(0.4)
    assert float(v.value) == pytest.approx(1.0 - 0.01 * 2.0 / np.sqrt(0.4), rel=1e-6)


def test_adam_bias_correction_once_per_step():
    a, b = _single(4.0), _single(-0.5)
    opt = Adam(lr=0.01)
    state = opt.init_state([a, b])
    opt.step(1, Var(0.0), [a, b], state)
    assert state.beta1_power == pytest.approx(0.9)
    assert state.beta2_power == pytest.approx(0.999)
    # first bias-corrected step moves each variable by ~lr against its gradient sign
    assert float(a.value) == pytest.approx(0.99, rel=1e-6)
    assert float(b.value) == pytest.approx(1.01, rel=1e-6)


def test_scipy_minimize_quadratic():
    x, y, z = _problem()
    result = minimize(z, [x, y])
    assert result.success
    np.testing.assert_allclose(result.x, [0.0, 0.0], atol=1e-5)
    assert z.value < 1e-8
    assert float(x.value) == pytest.approx(result.x[0])


def test_scipy_minimize_rosenbrock(capsys):
    a, b = Var(-1.2), Var(1.0)
    f = (1 - a) ** 2 + 100 * (b - a * a) ** 2
    result = minimize(ComputeGraph(f), [a, b], MinimizeConfig(method="BFGS", verbose=True))
    np.testing.assert_allclose(result.x, [1.0, 1.0], atol=1e-4)
    assert "BFGS" in capsys.readouterr().out
