"""Optimizer presets and utilities."""

from .config import OptimizerConfig
from .optimizer import build_optimizer
from .presets import (
    OPTIMIZER_PRESETS,
    get_optimizer_preset,
)

__all__ = [
    "OPTIMIZER_PRESETS",
    "OptimizerConfig",
    "build_optimizer",
    "get_optimizer_preset",
]
