"""/src/linmodel/utils/metrics.py
Evaluation metrics for fitted linear models.
"""

from .jax_config import ensure_x64_enabled

ensure_x64_enabled()

import jax.numpy as jnp


def calculate_mse(predictions: jnp.ndarray, targets: jnp.ndarray) -> float:
    """Mean squared error.

    MSE = (1/n) * sum((y_pred - y_true)^2)

    Args:
        predictions: predicted values, any shape.
        targets: ground truth with the same shape as ``predictions``.

    Returns:
        The MSE as a Python float.

    Examples:
        >>> calculate_mse(jnp.array([1.0, 2.0, 3.0]), jnp.array([1.1, 1.9, 3.2]))
        0.02...
    """
    predictions = jnp.asarray(predictions, dtype=jnp.float64)
    targets = jnp.asarray(targets, dtype=jnp.float64)
    if predictions.shape != targets.shape:
        raise ValueError(f"Shape mismatch: predictions {predictions.shape}, targets {targets.shape}.")
    return float(jnp.mean((predictions - targets) ** 2))


def calculate_mae(predictions: jnp.ndarray, targets: jnp.ndarray) -> float:
    """Mean absolute error, MAE = (1/n) * sum(|y_pred - y_true|)."""
    predictions = jnp.asarray(predictions, dtype=jnp.float64)
    targets = jnp.asarray(targets, dtype=jnp.float64)
    if predictions.shape != targets.shape:
        raise ValueError(f"Shape mismatch: predictions {predictions.shape}, targets {targets.shape}.")
    return float(jnp.mean(jnp.abs(predictions - targets)))


def accuracy_score(predictions: jnp.ndarray, targets: jnp.ndarray) -> float:
    """Compute classification accuracy for probabilities or label indices."""
    preds = jnp.asarray(predictions)
    targs = jnp.asarray(targets)

    if preds.shape != targs.shape and preds.size == targs.size:
        preds = preds.reshape(targs.shape)

    pred_labels = jnp.argmax(preds, axis=-1) if preds.ndim > 1 else preds
    true_labels = jnp.argmax(targs, axis=-1) if targs.ndim > 1 else targs

    return float(jnp.mean(pred_labels == true_labels))


__all__ = ["calculate_mse", "calculate_mae", "accuracy_score"]
