"""
Training Configuration

Dataclasses shared by the training loop and the scipy adapter.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class TrainConfig:
    """Configuration for `train`."""
    # Hard stop, independent of the end condition
    max_iterations: int = 100_000

    # Logging
    verbose: bool = False
    log_every: int = 100

    def __post_init__(self):
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if self.log_every < 1:
            raise ValueError(f"log_every must be >= 1, got {self.log_every}")


@dataclass
class TrainResult:
    """Outcome of a `train` run."""
    iterations: int
    value: float
    converged: bool
    history: List[float] = field(default_factory=list)


@dataclass
class MinimizeConfig:
    """Configuration for the scipy-backed `minimize`."""
    method: str = 'L-BFGS-B'  # any gradient-based scipy method: 'L-BFGS-B', 'BFGS', 'CG', ...
    max_iterations: int = 1000
    tolerance: float = 1e-10

    # Logging
    verbose: bool = False
