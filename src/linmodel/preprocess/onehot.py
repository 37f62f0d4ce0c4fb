"""
src/linmodel/preprocess/onehot.py
One-hot encoding of categorical columns, compatible with the Transformer protocol.

Columns that are not categorical in the feature index keep their original order
and come first; one one-hot block per categorical column is appended after them.
A categorical column whose largest fitted value is k gets a block of width k + 1.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

import jax
import jax.numpy as jnp

from linmodel.core.interfaces import Transformer
from linmodel.core.types import ConfigDict, JaxF64, as_jax_f64
from linmodel.data.features import FeatureIndex


class OneHotEncoder(Transformer):
    """Replaces categorical columns (per FeatureIndex) with one-hot blocks."""

    def __init__(self, feature_index: FeatureIndex) -> None:
        if not isinstance(feature_index, FeatureIndex):
            raise TypeError(f"OneHotEncoder expects a FeatureIndex, got {type(feature_index)}.")
        self.feature_index = feature_index
        self.block_widths_: Optional[tuple[int, ...]] = None

    @property
    def is_fitted(self) -> bool:
        return self.block_widths_ is not None

    def _prepare(self, features: Any) -> JaxF64:
        arr = as_jax_f64(features)
        if arr.ndim != 2:
            raise ValueError(f"OneHotEncoder expects a 2D feature matrix, got shape {arr.shape}")
        self.feature_index.check_width(arr.shape[1])
        return arr

    def _categories(self, arr: JaxF64) -> JaxF64:
        cols = jnp.asarray(self.feature_index.categorical, dtype=jnp.int32)
        values = arr[:, cols]
        if values.size:
            if not bool(jnp.all(values == jnp.round(values))):
                raise ValueError("Categorical features must hold integer category ids.")
            if float(jnp.min(values)) < 0:
                raise ValueError("Categorical features must hold non-negative category ids.")
        return values

    def fit(self, features: Any, y: Any = None) -> "OneHotEncoder":
        arr = self._prepare(features)
        values = self._categories(arr)
        if values.shape[1] == 0:
            self.block_widths_ = ()
        elif values.shape[0] == 0:
            raise ValueError("OneHotEncoder cannot be fitted on an empty feature matrix.")
        else:
            self.block_widths_ = tuple(int(v) + 1 for v in jnp.max(values, axis=0))
        return self

    def transform(self, features: Any) -> JaxF64:
        if self.block_widths_ is None:
            raise RuntimeError("OneHotEncoder is not fitted yet.")
        arr = self._prepare(features)
        values = self._categories(arr).astype(jnp.int32)

        categorical = set(self.feature_index.categorical)
        kept = jnp.asarray([c for c in range(arr.shape[1]) if c not in categorical], dtype=jnp.int32)
        # ids beyond the fitted width encode as all-zero rows
        blocks = [
            jax.nn.one_hot(values[:, i], width, dtype=jnp.float64)
            for i, width in enumerate(self.block_widths_)
        ]
        return jnp.concatenate([arr[:, kept], *blocks], axis=1)

    def fit_transform(self, features: Any) -> JaxF64:
        return self.fit(features).transform(features)

    def output_width(self, n_features: int) -> int:
        """Number of columns transform() produces for an input with ``n_features`` columns."""
        if self.block_widths_ is None:
            raise RuntimeError("OneHotEncoder is not fitted yet.")
        self.feature_index.check_width(n_features)
        return n_features - len(self.block_widths_) + sum(self.block_widths_)

    def to_dict(self) -> ConfigDict:
        data: ConfigDict = {"feature_index": self.feature_index.to_dict()}
        if self.block_widths_ is not None:
            data["block_widths"] = list(self.block_widths_)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OneHotEncoder":
        if "feature_index" not in data:
            raise ValueError("Serialized OneHotEncoder is missing required 'feature_index'.")
        encoder = cls(FeatureIndex.from_dict(data["feature_index"]))
        widths = data.get("block_widths")
        if widths is not None:
            if len(widths) != len(encoder.feature_index.categorical):
                raise ValueError(
                    f"Serialized OneHotEncoder has {len(widths)} block widths for "
                    f"{len(encoder.feature_index.categorical)} categorical columns."
                )
            encoder.block_widths_ = tuple(int(w) for w in widths)
        return encoder


__all__ = ["OneHotEncoder"]
