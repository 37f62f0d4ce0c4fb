"""/src/linmodel/core/identifiers.py
Enum-based identifiers for feature kinds and optimizers.
"""

from __future__ import annotations

import enum


class FeatureType(str, enum.Enum):
    """Kind of a feature column."""

    CATEGORICAL = "categorical"
    NUMERICAL = "numerical"

    def __str__(self) -> str:
        return self.value


class TaskType(str, enum.Enum):
    """What a model predicts."""

    REGRESSION = "regression"
    CLASSIFICATION = "classification"

    def __str__(self) -> str:
        return self.value


class OptimizerKind(str, enum.Enum):
    """First-order optimizers available to LinearModel.fit (see training.optimizer)."""

    ADAM = "adam"
    SGD = "sgd"

    def __str__(self) -> str:
        return self.value


__all__ = ["FeatureType", "TaskType", "OptimizerKind"]
