"""Builds optax gradient transformations from OptimizerConfig."""
from __future__ import annotations

import optax

from linmodel.core.identifiers import OptimizerKind
from linmodel.training.config import OptimizerConfig


def build_optimizer(config: OptimizerConfig) -> optax.GradientTransformation:
    if config.optimizer is OptimizerKind.ADAM:
        return optax.adam(float(config.learning_rate))
    if config.optimizer is OptimizerKind.SGD:
        momentum = float(config.momentum) or None
        return optax.sgd(float(config.learning_rate), momentum=momentum)
    raise TypeError(f"build_optimizer received unknown optimizer: {config.optimizer!r}")


__all__ = ["build_optimizer"]
