"""
src/linmodel/training/config.py
Optimizer configuration for LinearModel.fit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from linmodel.core.identifiers import OptimizerKind
from linmodel.core.types import ConfigDict


@dataclass(frozen=True)
class OptimizerConfig:
    """Configuration for the gradient-based fit loop."""
    name: str

    optimizer: OptimizerKind
    learning_rate: float
    momentum: float
    max_iter: int
    # Stop once the gradient norm drops below tol
    tol: float

    verbose: bool

    def __post_init__(self) -> None:
        if not isinstance(self.optimizer, OptimizerKind):
            try:
                object.__setattr__(self, "optimizer", OptimizerKind(self.optimizer))
            except ValueError as exc:
                raise ValueError(f"{self.name}: unknown optimizer {self.optimizer!r}.") from exc

    def validate(self, context: str = "optimizer") -> "OptimizerConfig":
        prefix = f"{context}: "
        if float(self.learning_rate) <= 0:
            raise ValueError(f"{prefix}learning_rate must be positive.")
        if not (0.0 <= float(self.momentum) < 1.0):
            raise ValueError(f"{prefix}momentum must be in [0,1).")
        if int(self.max_iter) < 1:
            raise ValueError(f"{prefix}max_iter must be >= 1.")
        if float(self.tol) < 0:
            raise ValueError(f"{prefix}tol must be non-negative.")
        return self

    def to_dict(self) -> ConfigDict:
        """Convert to dictionary, ensuring types are JSON-safe."""
        return {
            "name": self.name,
            "optimizer": self.optimizer.value,
            "learning_rate": float(self.learning_rate),
            "momentum": float(self.momentum),
            "max_iter": int(self.max_iter),
            "tol": float(self.tol),
            "verbose": bool(self.verbose),
        }
