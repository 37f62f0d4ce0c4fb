"""
src/linmodel/preprocess/pipeline.py
Sequential composition of Transformer components.
"""
from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Iterable, List

from linmodel.core.interfaces import Transformer
from linmodel.core.types import ConfigDict, JaxF64


def _resolve(path: str) -> type:
    module_name, _, class_name = path.rpartition(".")
    if not module_name:
        raise ValueError(f"Transformer path must be 'module.Class', got {path!r}.")
    transformer_cls = getattr(import_module(module_name), class_name, None)
    if transformer_cls is None or not hasattr(transformer_cls, "from_dict"):
        raise ValueError(f"{path!r} is not a serializable transformer.")
    return transformer_cls


class TransformerSequence(Transformer):
    """Applies a list of Transformer instances in order; each one is fitted on the previous output."""

    def __init__(self, transformers: Iterable[Transformer]) -> None:
        self.transformers: List[Transformer] = [t for t in transformers if t is not None]

    def fit(self, features: Any, y: Any = None) -> "TransformerSequence":
        self.fit_transform(features)
        return self

    def transform(self, features: Any) -> JaxF64:
        data = features
        for transformer in self.transformers:
            data = transformer.transform(data)
        return data

    def fit_transform(self, features: Any) -> JaxF64:
        data = features
        for transformer in self.transformers:
            data = transformer.fit_transform(data)
        return data

    def to_dict(self) -> ConfigDict:
        return {
            "transformers": [
                {"class": f"{type(t).__module__}.{type(t).__qualname__}", "config": t.to_dict()}
                for t in self.transformers
            ]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransformerSequence":
        return cls(
            _resolve(entry["class"]).from_dict(entry.get("config", {}))
            for entry in data.get("transformers", [])
        )


__all__ = ["TransformerSequence"]
