"""
Training package: update rules, the descent loop and a scipy adapter.

Provides 5 update rules:
1. SGD: plain descent with learning-rate halving on non-improvement
2. Momentum: exponential average of gradients
3. AdaGrad: per-variable accumulated squared gradient scaling
4. RMSprop: exponential average of squared gradients
5. Adam: bias-corrected first and second moments
"""

from .config import TrainConfig, TrainResult, MinimizeConfig
from .optimizers import Optimizer, OptimizerState, SGD, Momentum, AdaGrad, RMSprop, Adam
from .loop import train, value_below, max_iterations, any_of
from .scipy_adapter import minimize

__all__ = [
    'TrainConfig', 'TrainResult', 'MinimizeConfig',
    'Optimizer', 'OptimizerState',
    'SGD', 'Momentum', 'AdaGrad', 'RMSprop', 'Adam',
    'train', 'value_below', 'max_iterations', 'any_of',
    'minimize',
]
