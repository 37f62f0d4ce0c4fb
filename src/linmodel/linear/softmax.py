"""
src/linmodel/linear/softmax.py
Ridge-regularized multinomial (softmax) classifier with an implicit pivot class.

The last class has its weight vector fixed at zero and is kept out of the
parameter vector, so ``w`` reshapes to (n_features, num_classes - 1).

The probabilities computed by the loss are returned as an explicit SoftmaxCache
and handed to loss_grad, so one optimizer step runs a single forward pass
without keeping hidden state on the model.

Examples:
    model = SoftmaxClassifier()
    model = SoftmaxClassifier(lambda_=1.5).fit(x, y)
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

import jax
import jax.numpy as jnp

from linmodel.core.identifiers import TaskType
from linmodel.core.types import ConfigDict, JaxF64
from linmodel.linear.base import LinearModel
from linmodel.utils.metrics import accuracy_score


@dataclass(frozen=True, eq=False)
class SoftmaxCache:
    """Forward pass of one loss evaluation, consumed by the matching loss_grad call."""

    proba: JaxF64
    num_classes: int


@jax.jit
def _softmax_with_pivot(w_mat: JaxF64, x: JaxF64) -> JaxF64:
    z = x @ w_mat
    # one scalar shift for the whole matrix, not per row
    max_z = jnp.max(z)
    pivot = jnp.full((x.shape[0], 1), jnp.exp(-max_z), dtype=z.dtype)
    z_exp_pivot = jnp.concatenate([jnp.exp(z - max_z), pivot], axis=1)
    return z_exp_pivot / jnp.sum(z_exp_pivot, axis=1, keepdims=True)


@dataclass(frozen=True, eq=False)
class SoftmaxClassifier(LinearModel[SoftmaxCache]):
    """An immutable multinomial logistic regression model with ridge regularization.

    Args:
        lambda_: L2 regularization strength, must be non-negative, 0 means no regularization.
        num_classes: set by ``fit`` from the largest label; not meant to be passed by hand.
    """

    num_classes: Optional[int] = None

    task_type = TaskType.CLASSIFICATION

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.num_classes is not None:
            num_classes = int(self.num_classes)
            if num_classes < 2:
                raise ValueError(f"SoftmaxClassifier needs at least 2 classes, got {num_classes}.")
            object.__setattr__(self, "num_classes", num_classes)

    # ------------------------------------------------------------------ #
    # Validation helpers                                                 #
    # ------------------------------------------------------------------ #
    def _require_num_classes(self) -> int:
        if self.num_classes is None:
            raise ValueError("SoftmaxClassifier.num_classes is unknown; fit the model first.")
        return self.num_classes

    def _weight_matrix(self, w: JaxF64, x: JaxF64) -> JaxF64:
        num_classes = self._require_num_classes()
        w = jnp.asarray(w, dtype=jnp.float64)
        expected = x.shape[1] * (num_classes - 1)
        if w.size != expected:
            raise ValueError(
                f"Weight vector has {w.size} entries, expected {expected} "
                f"({x.shape[1]} features x {num_classes - 1} non-pivot classes)."
            )
        return w.reshape(x.shape[1], num_classes - 1)

    def _labels(self, y: JaxF64, n_samples: int) -> jnp.ndarray:
        num_classes = self._require_num_classes()
        y = jnp.asarray(y, dtype=jnp.float64)
        if y.ndim != 1 or y.shape[0] != n_samples:
            raise ValueError(f"Expected {n_samples} labels, got shape {y.shape}.")
        if not bool(jnp.all(y == jnp.round(y))):
            raise ValueError("Class labels must be integers.")
        if n_samples and (float(jnp.min(y)) < 0 or float(jnp.max(y)) >= num_classes):
            raise ValueError(
                f"Class labels must be in [0, {num_classes}), got range "
                f"[{float(jnp.min(y))}, {float(jnp.max(y))}]."
            )
        return y.astype(jnp.int32)

    @staticmethod
    def _design(x: JaxF64) -> JaxF64:
        x = jnp.asarray(x, dtype=jnp.float64)
        if x.ndim != 2:
            raise ValueError(f"Design matrix must be 2D, got {x.shape}")
        if x.shape[0] == 0:
            raise ValueError("Design matrix has no rows.")
        return x

    # ------------------------------------------------------------------ #
    # Stateless API                                                      #
    # ------------------------------------------------------------------ #
    def num_params(self, n_features: int) -> int:
        return n_features * (self._require_num_classes() - 1)

    def predict_proba_stateless(self, w: JaxF64, x: JaxF64) -> JaxF64:
        """Probability simplex (n, num_classes); the pivot class is the last column."""
        x = self._design(x)
        return _softmax_with_pivot(self._weight_matrix(w, x), x)

    def predict_stateless(self, w: JaxF64, x: JaxF64) -> JaxF64:
        return jnp.argmax(self.predict_proba_stateless(w, x), axis=1).astype(jnp.float64)

    def loss_with_cache(self, w: JaxF64, x: JaxF64, y: JaxF64) -> tuple[float, SoftmaxCache]:
        """Mean negative log-likelihood plus (lambda/2)*||W[1:]||^2.

        A zero probability for the true class gives an infinite loss; it is not clipped.
        """
        x = self._design(x)
        w_mat = self._weight_matrix(w, x)
        labels = self._labels(y, x.shape[0])
        proba = _softmax_with_pivot(w_mat, x)

        proba_of_true_class = proba[jnp.arange(x.shape[0]), labels]
        nll = jnp.sum(jnp.log(proba_of_true_class)) / (-x.shape[0])
        penalty = 0.5 * self.lambda_ * jnp.sum(w_mat[1:, :] ** 2)
        return float(nll + penalty), SoftmaxCache(proba=proba, num_classes=self._require_num_classes())

    def loss_grad(self, w: JaxF64, x: JaxF64, y: JaxF64, cache: Optional[SoftmaxCache] = None) -> JaxF64:
        """Gradient of loss_with_cache w.r.t. ``w``, flattened like ``w``.

        ``cache`` must come from loss_with_cache on the same (w, x, y); without one
        the forward pass is recomputed.
        """
        x = self._design(x)
        w_mat = self._weight_matrix(w, x)
        labels = self._labels(y, x.shape[0])
        num_classes = self._require_num_classes()

        if cache is None:
            proba = _softmax_with_pivot(w_mat, x)
        else:
            if cache.num_classes != num_classes or cache.proba.shape != (x.shape[0], num_classes):
                raise ValueError(
                    f"Stale probability cache: shape {cache.proba.shape} for {cache.num_classes} classes, "
                    f"expected ({x.shape[0]}, {num_classes})."
                )
            proba = cache.proba

        # rows labelled with the pivot class stay all-zero
        indicator = jax.nn.one_hot(labels, num_classes - 1, dtype=jnp.float64)
        grad = (x.T @ (indicator - proba[:, :-1])) / (-x.shape[0])
        grad = grad.at[1:, :].add(self.lambda_ * w_mat[1:, :])
        return grad.reshape(-1)

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #
    def _prepare_fit(self, y: JaxF64) -> "SoftmaxClassifier":
        if not bool(jnp.all(y == jnp.round(y))) or float(jnp.min(y)) < 0:
            raise ValueError("Class labels must be non-negative integers.")
        num_classes = int(jnp.max(y)) + 1
        if num_classes < 2:
            raise ValueError(f"SoftmaxClassifier needs at least 2 classes, got labels for {num_classes}.")
        return replace(self, num_classes=num_classes, w=None, train_logs=None)

    def _summary(self, x: JaxF64, y: JaxF64) -> str:
        return f" | train_accuracy={accuracy_score(self.predict_stateless(self.w, x), y):.4f}"

    def predict_proba(self, features: Any) -> JaxF64:
        w = self._require_fitted()
        return self.predict_proba_stateless(w, self._prepare_features(features, fitting=False))

    @property
    def n_features_in_(self) -> int:
        return self._require_fitted().size // (self._require_num_classes() - 1) - 1

    @property
    def coef_(self) -> JaxF64:
        """(n_features, num_classes - 1) weights without the intercept row."""
        w = self._require_fitted()
        return w.reshape(-1, self._require_num_classes() - 1)[1:, :]

    @property
    def intercept_(self) -> JaxF64:
        w = self._require_fitted()
        return w.reshape(-1, self._require_num_classes() - 1)[0, :]

    def to_dict(self) -> ConfigDict:
        data = super().to_dict()
        data["num_classes"] = self.num_classes
        return data

    @classmethod
    def _from_dict_kwargs(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        kwargs = super()._from_dict_kwargs(data)
        if data.get("num_classes") is not None:
            kwargs["num_classes"] = int(data["num_classes"])
        return kwargs


__all__ = ["SoftmaxClassifier", "SoftmaxCache"]
