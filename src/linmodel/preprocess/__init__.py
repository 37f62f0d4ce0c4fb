"""Preprocessing transformers applied before the linear models."""

from .onehot import OneHotEncoder  # noqa: F401
from .pipeline import TransformerSequence  # noqa: F401
from .scaler import StandardScaler  # noqa: F401

__all__ = [
    "OneHotEncoder",
    "TransformerSequence",
    "StandardScaler",
]
