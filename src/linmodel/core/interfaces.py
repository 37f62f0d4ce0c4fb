"""/src/linmodel/core/interfaces.py
Lightweight protocol interfaces used across preprocessing and model components.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from linmodel.core.types import ConfigDict


@runtime_checkable
class Transformer(Protocol):
    """Fitful preprocessing contract."""

    def fit(self, features: Any, y: Any = None) -> "Transformer":
        ...

    def transform(self, features: Any) -> Any:
        ...

    def fit_transform(self, features: Any) -> Any:
        ...

    def to_dict(self) -> ConfigDict:
        ...


@runtime_checkable
class Estimator(Protocol):
    """Contract shared by every fitted model: fit returns a new fitted instance."""

    @property
    def is_fitted(self) -> bool:
        ...

    def fit(self, features: Any, targets: Any, config: Any = None) -> "Estimator":
        ...

    def predict(self, features: Any) -> Any:
        ...

    def to_dict(self) -> ConfigDict:
        ...


__all__ = ["Transformer", "Estimator"]
