"""
src/linmodel/data/features.py
Feature index metadata: which columns of a feature matrix are categorical.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from linmodel.core.identifiers import FeatureType
from linmodel.core.types import ConfigDict


@dataclass(frozen=True)
class FeatureIndex:
    """Per-column feature kinds for the columns listed in ``columns``.

    ``columns`` holds positions in the feature matrix; ``None`` means
    ``0..len(types)-1``. Columns of the matrix that are not listed are left
    untouched by transformers that consult the index.
    """

    types: tuple[FeatureType, ...]
    columns: Optional[tuple[int, ...]] = None

    def __post_init__(self) -> None:
        types = tuple(FeatureType(t) for t in self.types)
        columns = tuple(range(len(types))) if self.columns is None else tuple(int(c) for c in self.columns)
        if len(columns) != len(types):
            raise ValueError(f"FeatureIndex: got {len(types)} types for {len(columns)} columns.")
        if any(c < 0 for c in columns):
            raise ValueError(f"FeatureIndex: column positions must be non-negative, got {columns}.")
        if len(set(columns)) != len(columns):
            raise ValueError(f"FeatureIndex: duplicate column positions in {columns}.")
        object.__setattr__(self, "types", types)
        object.__setattr__(self, "columns", columns)

    @classmethod
    def categorical_only(cls, n_features: int) -> "FeatureIndex":
        return cls(tuple(FeatureType.CATEGORICAL for _ in range(int(n_features))))

    @classmethod
    def numerical_only(cls, n_features: int) -> "FeatureIndex":
        return cls(tuple(FeatureType.NUMERICAL for _ in range(int(n_features))))

    def __len__(self) -> int:
        return len(self.types)

    @property
    def categorical(self) -> tuple[int, ...]:
        return tuple(c for c, t in zip(self.columns, self.types) if t is FeatureType.CATEGORICAL)

    @property
    def numerical(self) -> tuple[int, ...]:
        return tuple(c for c, t in zip(self.columns, self.types) if t is FeatureType.NUMERICAL)

    def subset(self, indices: Iterable[int]) -> "FeatureIndex":
        """Restrict the index to the given column positions."""
        positions = {c: i for i, c in enumerate(self.columns)}
        selected = [int(i) for i in indices]
        missing = [i for i in selected if i not in positions]
        if missing:
            raise ValueError(f"FeatureIndex.subset: columns {missing} are not part of the index {self.columns}.")
        return FeatureIndex(
            types=tuple(self.types[positions[i]] for i in selected),
            columns=tuple(selected),
        )

    def drop(self, indices: Iterable[int]) -> "FeatureIndex":
        """Remove the given column positions from the index; the rest keep their order."""
        dropped = {int(i) for i in indices}
        missing = sorted(dropped.difference(self.columns))
        if missing:
            raise ValueError(f"FeatureIndex.drop: columns {missing} are not part of the index {self.columns}.")
        return self.subset(c for c in self.columns if c not in dropped)

    def check_width(self, n_features: int) -> None:
        """Raise if the index refers to columns a matrix of ``n_features`` does not have."""
        if self.columns and max(self.columns) >= n_features:
            raise ValueError(
                f"FeatureIndex refers to column {max(self.columns)}, "
                f"but the feature matrix has only {n_features} columns."
            )

    def to_dict(self) -> ConfigDict:
        return {
            "types": [t.value for t in self.types],
            "columns": list(self.columns),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeatureIndex":
        if "types" not in data:
            raise ValueError("Serialized FeatureIndex is missing required 'types'.")
        columns = data.get("columns")
        return cls(
            types=tuple(FeatureType(t) for t in data["types"]),
            columns=None if columns is None else tuple(int(c) for c in columns),
        )


__all__ = ["FeatureIndex", "FeatureType"]
