"""
src/linmodel/linear/base.py
Shared contract for immutable linear models fitted by first-order optimization.

Subclasses implement the stateless API on a design matrix that already contains
the intercept column:

    predict_stateless(w, x)
    loss_with_cache(w, x, y) -> (loss, cache)
    loss_grad(w, x, y, cache=None)

The base class owns intercept handling, input validation, the optax fit loop and
serialization. Models are frozen: ``fit`` returns a new fitted instance.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Dict, Generic, Optional, TypeVar

import jax.numpy as jnp
import optax
from tqdm import tqdm

from linmodel.core.identifiers import TaskType
from linmodel.core.types import ConfigDict, JaxF64, TrainLogs, as_jax_f64, to_np_f64
from linmodel.training.config import OptimizerConfig
from linmodel.training.optimizer import build_optimizer
from linmodel.training.presets import get_optimizer_preset

CacheT = TypeVar("CacheT")
ModelT = TypeVar("ModelT", bound="LinearModel")


def add_intercept(features: JaxF64) -> JaxF64:
    """Prepend a column of ones to a 2D feature matrix."""
    ones = jnp.ones((features.shape[0], 1), dtype=features.dtype)
    return jnp.concatenate([ones, features], axis=1)


@dataclass(frozen=True, eq=False)
class LinearModel(ABC, Generic[CacheT]):
    """Ridge-regularized linear model over a flat parameter vector ``w``.

    ``w`` element / row 0 belongs to the intercept and is excluded from the
    L2 penalty.
    """

    lambda_: float = 0.0
    w: Optional[JaxF64] = field(default=None, repr=False)
    train_logs: Optional[TrainLogs] = field(default=None, repr=False, compare=False)

    task_type: ClassVar[TaskType]

    def __post_init__(self) -> None:
        lambda_val = float(self.lambda_)
        # NaN fails this comparison too
        if not lambda_val >= 0.0:
            raise ValueError(f"{type(self).__name__}: L2 regularization strength must be non-negative, got {lambda_val}.")
        object.__setattr__(self, "lambda_", lambda_val)

    # ------------------------------------------------------------------ #
    # Stateless API (design matrix includes the intercept column)        #
    # ------------------------------------------------------------------ #
    @abstractmethod
    def num_params(self, n_features: int) -> int:
        """Length of ``w`` for a design matrix with ``n_features`` columns."""

    @abstractmethod
    def predict_stateless(self, w: JaxF64, x: JaxF64) -> JaxF64:
        ...

    @abstractmethod
    def loss_with_cache(self, w: JaxF64, x: JaxF64, y: JaxF64) -> tuple[float, Optional[CacheT]]:
        ...

    @abstractmethod
    def loss_grad(self, w: JaxF64, x: JaxF64, y: JaxF64, cache: Optional[CacheT] = None) -> JaxF64:
        ...

    def loss(self, w: JaxF64, x: JaxF64, y: JaxF64) -> float:
        return self.loss_with_cache(w, x, y)[0]

    def loss_and_grad(self, w: JaxF64, x: JaxF64, y: JaxF64) -> tuple[float, JaxF64]:
        """One optimizer step worth of work: the loss, then its gradient from the same forward pass."""
        value, cache = self.loss_with_cache(w, x, y)
        return value, self.loss_grad(w, x, y, cache)

    # ------------------------------------------------------------------ #
    # Hooks                                                              #
    # ------------------------------------------------------------------ #
    def _prepare_targets(self, targets: JaxF64, n_samples: int) -> JaxF64:
        y = as_jax_f64(targets)
        if y.ndim != 1:
            raise ValueError(f"Targets must be 1D, got {y.shape}")
        if y.shape[0] != n_samples:
            raise ValueError(f"Mismatched samples: features have {n_samples}, targets have {y.shape[0]}.")
        return y

    def _prepare_fit(self: ModelT, y: JaxF64) -> ModelT:
        """Return the (unfitted) copy the optimizer works with; classifiers fix num_classes here."""
        return self

    def _summary(self, x: JaxF64, y: JaxF64) -> str:
        return ""

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #
    @property
    def is_fitted(self) -> bool:
        return self.w is not None

    def _prepare_features(self, features: Any, *, fitting: bool) -> JaxF64:
        x = as_jax_f64(features)
        if x.ndim != 2:
            raise ValueError(f"Features must be 2D, got {x.shape}")
        if not fitting:
            expected = self.n_features_in_
            if x.shape[1] != expected:
                raise ValueError(f"Expected features with {expected} columns, got {x.shape[1]}.")
        return add_intercept(x)

    def _require_fitted(self) -> JaxF64:
        if self.w is None:
            raise RuntimeError(f"{type(self).__name__} is not fitted yet.")
        return self.w

    def fit(self: ModelT, features: Any, targets: Any, config: Optional[OptimizerConfig] = None) -> ModelT:
        """Minimize the regularized loss from zero weights and return a fitted copy."""
        cfg = (config if config is not None else get_optimizer_preset("standard")).validate()
        x = self._prepare_features(features, fitting=True)
        y = self._prepare_targets(targets, x.shape[0])
        model = self._prepare_fit(y)

        w = jnp.zeros(model.num_params(x.shape[1]), dtype=jnp.float64)
        tx = build_optimizer(cfg)
        opt_state = tx.init(w)

        if cfg.verbose:
            print(f"    [Fit] {type(self).__name__} ({self.task_type}): {x.shape[0]} samples, {x.shape[1] - 1} features, "
                  f"lambda={model.lambda_}, optimizer={cfg.optimizer} (lr={cfg.learning_rate})")

        loss_history: list[float] = []
        grad_norm = float("inf")
        converged = False
        pbar = tqdm(range(int(cfg.max_iter)), desc="[Fit]", unit="it", disable=not cfg.verbose)
        for _ in pbar:
            value, grad = model.loss_and_grad(w, x, y)
            loss_history.append(float(value))
            grad_norm = float(jnp.linalg.norm(grad))
            if grad_norm < cfg.tol:
                converged = True
                break
            updates, opt_state = tx.update(grad, opt_state, w)
            # Each step produces a new weight vector
            w = optax.apply_updates(w, updates)
            pbar.set_postfix({"loss": f"{loss_history[-1]:.6f}"})
        pbar.close()

        logs: TrainLogs = {
            "loss_history": loss_history,
            "final_loss": loss_history[-1],
            "grad_norm": grad_norm,
            "n_iter": len(loss_history),
            "converged": converged,
        }
        fitted = replace(model, w=w, train_logs=logs)
        if cfg.verbose:
            status = "converged" if converged else "stopped at max_iter"
            print(f"    [Fit] {status} after {logs['n_iter']} iterations | "
                  f"loss={logs['final_loss']:.6f} | grad_norm={grad_norm:.2e}{fitted._summary(x, y)}")
        return fitted

    def predict(self, features: Any) -> JaxF64:
        w = self._require_fitted()
        return self.predict_stateless(w, self._prepare_features(features, fitting=False))

    @property
    @abstractmethod
    def n_features_in_(self) -> int:
        """Number of raw feature columns (without intercept) the fitted model expects."""

    # ------------------------------------------------------------------ #
    # Serialization                                                      #
    # ------------------------------------------------------------------ #
    def to_dict(self) -> ConfigDict:
        data: ConfigDict = {"lambda_": self.lambda_}
        if self.w is not None:
            data["w"] = to_np_f64(self.w).tolist()
        return data

    @classmethod
    def _from_dict_kwargs(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        if "lambda_" not in data:
            raise ValueError(f"Serialized {cls.__name__} is missing required 'lambda_'.")
        kwargs: Dict[str, Any] = {"lambda_": float(data["lambda_"])}
        if data.get("w") is not None:
            kwargs["w"] = as_jax_f64(data["w"])
        return kwargs

    @classmethod
    def from_dict(cls: type[ModelT], data: Dict[str, Any]) -> ModelT:
        return cls(**cls._from_dict_kwargs(data))


__all__ = ["LinearModel", "add_intercept"]
