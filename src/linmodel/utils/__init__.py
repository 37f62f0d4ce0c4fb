"""Utility helpers used across linmodel.

This subpackage groups together generic utilities such as:
- JAX configuration
- Metrics

They are re-exported here for convenience, so callers can import from
`linmodel.utils.*` or from `linmodel.utils` directly.
"""

from .jax_config import ensure_x64_enabled  # noqa: F401
from .metrics import accuracy_score, calculate_mae, calculate_mse  # noqa: F401

__all__ = [
    "ensure_x64_enabled",
    "accuracy_score",
    "calculate_mae",
    "calculate_mse",
]
