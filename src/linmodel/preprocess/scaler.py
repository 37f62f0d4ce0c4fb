"""/src/linmodel/preprocess/scaler.py
Feature scaling transformer (standardization) compatible with the Transformer protocol.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

import jax.numpy as jnp

from linmodel.core.interfaces import Transformer
from linmodel.core.types import ConfigDict, JaxF64, as_jax_f64
from linmodel.data.features import FeatureIndex


class StandardScaler(Transformer):
    """Centers and scales numerical features; categorical columns pass through.

    Without a feature index every column is treated as numerical.
    """

    def __init__(self, feature_index: Optional[FeatureIndex] = None, epsilon: float = 1e-8) -> None:
        self.feature_index = feature_index
        self.epsilon = float(epsilon)
        self._columns: Optional[tuple[int, ...]] = None
        self._mean: Optional[jnp.ndarray] = None
        self._std: Optional[jnp.ndarray] = None

    def _prepare(self, features: Any) -> JaxF64:
        arr = as_jax_f64(features)
        if arr.ndim != 2:
            raise ValueError(f"StandardScaler expects a 2D feature matrix, got shape {arr.shape}")
        if self.feature_index is not None:
            self.feature_index.check_width(arr.shape[1])
        return arr

    def fit(self, features: Any, y: Any = None) -> "StandardScaler":
        arr = self._prepare(features)
        if self.feature_index is None:
            columns = tuple(range(arr.shape[1]))
        else:
            columns = self.feature_index.numerical
        selected = arr[:, jnp.asarray(columns, dtype=jnp.int32)]
        self._columns = columns
        self._mean = jnp.mean(selected, axis=0)
        std = jnp.std(selected, axis=0)
        self._std = jnp.where(std < self.epsilon, 1.0, std)
        return self

    def transform(self, features: Any) -> JaxF64:
        if self._columns is None or self._mean is None or self._std is None:
            raise RuntimeError("StandardScaler is not fitted yet.")
        arr = self._prepare(features)
        if self.feature_index is None and arr.shape[1] != len(self._columns):
            raise ValueError(f"Expected {len(self._columns)} features, got {arr.shape[1]}.")
        cols = jnp.asarray(self._columns, dtype=jnp.int32)
        return arr.at[:, cols].set((arr[:, cols] - self._mean) / self._std)

    def fit_transform(self, features: Any) -> JaxF64:
        return self.fit(features).transform(features)

    def to_dict(self) -> ConfigDict:
        data: ConfigDict = {"epsilon": self.epsilon}
        if self.feature_index is not None:
            data["feature_index"] = self.feature_index.to_dict()
        if self._columns is not None:
            data["columns"] = list(self._columns)
            data["mean"] = jnp.asarray(self._mean).tolist()
            data["std"] = jnp.asarray(self._std).tolist()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StandardScaler":
        index = data.get("feature_index")
        scaler = cls(
            feature_index=None if index is None else FeatureIndex.from_dict(index),
            epsilon=float(data.get("epsilon", 1e-8)),
        )
        if data.get("columns") is not None:
            scaler._columns = tuple(int(c) for c in data["columns"])
            scaler._mean = jnp.asarray(data["mean"], dtype=jnp.float64)
            scaler._std = jnp.asarray(data["std"], dtype=jnp.float64)
        return scaler


__all__ = ["StandardScaler"]
