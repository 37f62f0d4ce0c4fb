"""Feature metadata shared by preprocessing transformers."""

from .features import FeatureIndex, FeatureType

__all__ = ["FeatureIndex", "FeatureType"]
