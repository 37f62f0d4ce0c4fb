"""Immutable ridge-regularized linear models."""

from .base import LinearModel, add_intercept
from .regression import LinearRegression
from .softmax import SoftmaxCache, SoftmaxClassifier

__all__ = [
    "LinearModel",
    "LinearRegression",
    "SoftmaxCache",
    "SoftmaxClassifier",
    "add_intercept",
]
