"""
linmodel/core/types.py: Central type definitions and the array gateway.

NUMPY domain -> NpF64 (caller-provided data)
JAX domain   -> JaxF64 (everything the models compute with)

NumPy -> JAX conversion goes through to_jax_f64(); the reverse through to_np_f64().
"""
from beartype import beartype
from jaxtyping import Float64, jaxtyped
import jax
from jax import Array
import jax.numpy as jnp
import numpy as np

from typing import TypedDict

# ==========================================
# Array aliases
# ==========================================
NpF64 = Float64[np.ndarray, "..."]
JaxF64 = Float64[Array, "..."]


class TrainLogs(TypedDict, total=False):
    """Optimizer trace recorded by LinearModel.fit."""
    loss_history: list[float]
    final_loss: float
    grad_norm: float
    n_iter: int
    converged: bool


# ==========================================
# Config domain types
# ==========================================
PrimitiveValue = str | float | int | bool | None

ConfigL1 = PrimitiveValue | tuple[PrimitiveValue, ...] | list[PrimitiveValue] | dict[str, PrimitiveValue]
ConfigL2 = ConfigL1 | tuple[ConfigL1, ...] | list[ConfigL1] | dict[str, ConfigL1]
ConfigL3 = ConfigL2 | tuple[ConfigL2, ...] | list[ConfigL2] | dict[str, ConfigL2]

# Return type of every to_dict()
ConfigDict = dict[str, ConfigL3]


# ==========================================
# Gateway NumPy <-> JAX
# ==========================================

@jaxtyped(typechecker=beartype)
def to_jax_f64(x: NpF64) -> JaxF64:
    """NumPy -> JAX float64 conversion.

    - beartype only accepts float64 numpy arrays
    - NaN/Inf in caller data fails immediately
    """
    if np.any(np.isnan(x)):
        raise ValueError(f"NaN detected in input data! shape={x.shape}")
    if np.any(np.isinf(x)):
        raise ValueError(f"Inf detected in input data! shape={x.shape}")
    return jax.device_put(jnp.asarray(x, dtype=jnp.float64))


@jaxtyped(typechecker=beartype)
def to_np_f64(x: JaxF64) -> NpF64:
    """JAX -> NumPy float64 conversion (used for serialization)."""
    return np.asarray(x, dtype=np.float64)


def as_jax_f64(data: object) -> JaxF64:
    """Accept lists, numpy or jax arrays and route them through the gateway."""
    return to_jax_f64(np.asarray(data, dtype=np.float64))


__all__ = [
    "NpF64",
    "JaxF64",
    "TrainLogs",
    "PrimitiveValue",
    "ConfigDict",
    "to_jax_f64",
    "to_np_f64",
    "as_jax_f64",
]
