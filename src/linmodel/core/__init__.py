"""Core protocol interfaces and shared types for linmodel components."""

from .identifiers import FeatureType, OptimizerKind, TaskType
from .interfaces import Estimator, Transformer

__all__ = ["FeatureType", "OptimizerKind", "TaskType", "Estimator", "Transformer"]
