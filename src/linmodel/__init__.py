# Package init
# Enforce 64-bit precision globally for numerical stability and determinism
from linmodel.utils.jax_config import ensure_x64_enabled

ensure_x64_enabled()

from linmodel.data.features import FeatureIndex, FeatureType  # noqa: E402
from linmodel.linear import LinearRegression, SoftmaxCache, SoftmaxClassifier  # noqa: E402
from linmodel.preprocess import OneHotEncoder, StandardScaler, TransformerSequence  # noqa: E402
from linmodel.training import OptimizerConfig, get_optimizer_preset  # noqa: E402

__version__ = "0.1.0"

__all__ = [
    "FeatureIndex",
    "FeatureType",
    "LinearRegression",
    "SoftmaxCache",
    "SoftmaxClassifier",
    "OneHotEncoder",
    "StandardScaler",
    "TransformerSequence",
    "OptimizerConfig",
    "get_optimizer_preset",
]
