"""
src/linmodel/linear/regression.py
Ridge-regularized multiple linear regression fitted by gradient descent.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import jax.numpy as jnp

from linmodel.core.identifiers import TaskType
from linmodel.core.types import JaxF64
from linmodel.linear.base import LinearModel
from linmodel.utils.metrics import calculate_mse


@dataclass(frozen=True, eq=False)
class LinearRegression(LinearModel[None]):
    """An immutable multiple linear regression model with ridge regularization.

    Args:
        lambda_: L2 regularization strength, must be non-negative, 0 means no regularization.

    Examples:
        model = LinearRegression()
        model = LinearRegression(lambda_=1.5).fit(x, y)
    """

    task_type = TaskType.REGRESSION

    @staticmethod
    def _check(w: JaxF64, x: JaxF64, y: Optional[JaxF64] = None) -> tuple[JaxF64, JaxF64, Optional[JaxF64]]:
        x = jnp.asarray(x, dtype=jnp.float64)
        w = jnp.asarray(w, dtype=jnp.float64)
        if x.ndim != 2:
            raise ValueError(f"Design matrix must be 2D, got {x.shape}")
        if x.shape[0] == 0:
            raise ValueError("Design matrix has no rows.")
        if w.shape != (x.shape[1],):
            raise ValueError(f"Weight vector has shape {w.shape}, expected ({x.shape[1]},).")
        if y is not None:
            y = jnp.asarray(y, dtype=jnp.float64)
            if y.shape != (x.shape[0],):
                raise ValueError(f"Expected {x.shape[0]} targets, got shape {y.shape}.")
        return w, x, y

    def num_params(self, n_features: int) -> int:
        return n_features

    def predict_stateless(self, w: JaxF64, x: JaxF64) -> JaxF64:
        w, x, _ = self._check(w, x)
        return x @ w

    def loss_with_cache(self, w: JaxF64, x: JaxF64, y: JaxF64) -> tuple[float, None]:
        """0.5 * (||y - xw||^2 / n + lambda * ||w[1:]||^2); nothing worth caching."""
        w, x, y = self._check(w, x, y)
        d = y - x @ w
        value = 0.5 * (jnp.dot(d, d) / x.shape[0] + self.lambda_ * jnp.dot(w[1:], w[1:]))
        return float(value), None

    def loss_grad(self, w: JaxF64, x: JaxF64, y: JaxF64, cache: None = None) -> JaxF64:
        w, x, y = self._check(w, x, y)
        grad = (x.T @ (y - x @ w)) / (-x.shape[0])
        return grad.at[1:].add(self.lambda_ * w[1:])

    def _summary(self, x: JaxF64, y: JaxF64) -> str:
        return f" | train_mse={calculate_mse(self.predict_stateless(self.w, x), y):.6f}"

    @property
    def n_features_in_(self) -> int:
        return self._require_fitted().size - 1

    @property
    def coef_(self) -> JaxF64:
        return self._require_fitted()[1:]

    @property
    def intercept_(self) -> float:
        return float(self._require_fitted()[0])


__all__ = ["LinearRegression"]
