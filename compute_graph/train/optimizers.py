"""
Gradient-descent update rules.

Every optimizer reads `grad` from each variable (filled by a previous backward
pass) and writes a new `value` in place. Per-variable buffers live in an
explicit OptimizerState, created by `init_state` and passed to every `step`:

    state = opt.init_state(variables)
    opt.step(iteration, root, variables, state)

An optimizer instance is also a plain `(iteration, root, variables)` callable;
in that form it keeps its own state between calls.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..core.node import Node, Var

EPS = 1e-8


@dataclass
class OptimizerState:
    """Mutable optimizer state, parallel in shape to the variable list."""
    lr: float
    velocity: np.ndarray           # momentum / first-moment buffer
    sq_grad: np.ndarray            # squared-gradient accumulator / second moment
    beta1_power: float = 1.0       # beta1^t for bias correction
    beta2_power: float = 1.0       # beta2^t for bias correction
    last_value: Optional[float] = None


def _grads(variables: Sequence[Var]) -> np.ndarray:
    return np.array([float(v.grad) for v in variables], dtype=float)


def _apply(variables: Sequence[Var], delta: np.ndarray) -> None:
    for v, d in zip(variables, delta):
        v.value = np.float64(v.value + d)


def _check_beta(name: str, beta: float) -> None:
    if not 0.0 <= beta < 1.0:
        raise ValueError(f"{name} must be in [0, 1), got {beta}")


class Optimizer(ABC):
    """
    Base class for update rules.

    Attributes:
        lr (float): Initial learning rate
        method_name (str): Name of the rule
    """

    def __init__(self, lr: float = 0.01):
        if lr <= 0:
            raise ValueError(f"lr must be positive, got {lr}")
        self.lr = lr
        self.method_name = "Base"
        self._state: Optional[OptimizerState] = None

    def init_state(self, variables: Sequence[Var]) -> OptimizerState:
        n = len(variables)
        return OptimizerState(lr=self.lr, velocity=np.zeros(n), sq_grad=np.zeros(n))

    @abstractmethod
    def step(self, iteration: int, root: Node, variables: Sequence[Var],
             state: OptimizerState) -> None:
        """Update every variable's value from its grad."""

    def __call__(self, iteration: int, root: Node, variables: Sequence[Var]) -> None:
        if self._state is None or len(self._state.velocity) != len(variables):
            self._state = self.init_state(variables)
        self.step(iteration, root, variables, self._state)

    def reset(self) -> None:
        self._state = None

    def __repr__(self):
        return f"{self.method_name}(lr={self.lr})"


class SGD(Optimizer):
    """
    Plain gradient descent: v -= lr * g.

    The learning rate is halved whenever the objective did not decrease
    since the previous step.
    """

    def __init__(self, lr: float = 0.01):
        super().__init__(lr)
        self.method_name = "SGD"

    def step(self, iteration, root, variables, state):
        _apply(variables, -state.lr * _grads(variables))

        current = float(root.value)
        if state.last_value is not None and current >= state.last_value:
            state.lr /= 2
        state.last_value = current


class Momentum(Optimizer):
    """m = μ·m + (1 - μ)·g ;  v -= lr * m"""

    def __init__(self, lr: float = 0.01, momentum: float = 0.9):
        super().__init__(lr)
        _check_beta("momentum", momentum)
        self.momentum = momentum
        self.method_name = "Momentum"

    def step(self, iteration, root, variables, state):
        g = _grads(variables)
        state.velocity = self.momentum * state.velocity + (1.0 - self.momentum) * g
        _apply(variables, -state.lr * state.velocity)


class AdaGrad(Optimizer):
    """s += g² ;  v -= lr * g / (√s + ε)"""

    def __init__(self, lr: float = 0.01):
        super().__init__(lr)
        self.method_name = "AdaGrad"

    def step(self, iteration, root, variables, state):
        g = _grads(variables)
        state.sq_grad = state.sq_grad + g * g
        _apply(variables, -state.lr * g / (np.sqrt(state.sq_grad) + EPS))


class RMSprop(Optimizer):
    """s = β·s + (1 - β)·g² ;  v -= lr * g / (√s + ε)"""

    def __init__(self, lr: float = 0.01, beta: float = 0.9):
        super().__init__(lr)
        _check_beta("beta", beta)
        self.beta = beta
        self.method_name = "RMSprop"

    def step(self, iteration, root, variables, state):
        g = _grads(variables)
        state.sq_grad = self.beta * state.sq_grad + (1.0 - self.beta) * g * g
        _apply(variables, -state.lr * g / (np.sqrt(state.sq_grad) + EPS))


class Adam(Optimizer):
    """
    Adam: first and second moment estimates with bias correction.

        m = β1·m + (1 - β1)·g
        s = β2·s + (1 - β2)·g²
        m̂ = m / (1 - β1^t),  ŝ = s / (1 - β2^t)
        v -= lr * m̂ / (√ŝ + ε)
    """

    def __init__(self, lr: float = 0.01, beta1: float = 0.9, beta2: float = 0.999):
        super().__init__(lr)
        _check_beta("beta1", beta1)
        _check_beta("beta2", beta2)
        self.beta1 = beta1
        self.beta2 = beta2
        self.method_name = "Adam"

    def step(self, iteration, root, variables, state):
        g = _grads(variables)
        state.velocity = self.beta1 * state.velocity + (1.0 - self.beta1) * g
        state.sq_grad = self.beta2 * state.sq_grad + (1.0 - self.beta2) * g * g
        state.beta1_power *= self.beta1
        state.beta2_power *= self.beta2

        m_hat = state.velocity / (1.0 - state.beta1_power)
        s_hat = state.sq_grad / (1.0 - state.beta2_power)
        _apply(variables, -state.lr * m_hat / (np.sqrt(s_hat) + EPS))
