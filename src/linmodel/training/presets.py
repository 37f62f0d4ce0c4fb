from typing import Dict

from linmodel.core.identifiers import OptimizerKind
from linmodel.training.config import OptimizerConfig


# --- Preset Definitions ---

OPTIMIZER_PRESETS: Dict[str, OptimizerConfig] = {
    "standard": OptimizerConfig(
        name="standard",
        optimizer=OptimizerKind.ADAM,
        learning_rate=0.05,
        momentum=0.0,
        max_iter=1000,
        tol=1e-6,
        verbose=False,
    ),
    # Plain gradient descent, suited to standardized features
    "gd": OptimizerConfig(
        name="gd",
        optimizer=OptimizerKind.SGD,
        learning_rate=0.1,
        momentum=0.0,
        max_iter=5000,
        tol=1e-8,
        verbose=False,
    ),
    "fast": OptimizerConfig(
        name="fast",
        optimizer=OptimizerKind.ADAM,
        learning_rate=0.1,
        momentum=0.0,
        max_iter=200,
        tol=1e-4,
        verbose=False,
    ),
}


def get_optimizer_preset(name: str) -> OptimizerConfig:
    preset = OPTIMIZER_PRESETS.get(name)
    if preset is None:
        raise KeyError(f"Optimizer preset '{name}' not found.")
    return preset


__all__ = [
    "OptimizerConfig",
    "OPTIMIZER_PRESETS",
    "get_optimizer_preset",
]
