"""Unit tests for evaluation metrics."""
import jax.numpy as jnp
import pytest

from linmodel.utils import accuracy_score, calculate_mae, calculate_mse


class TestCalculateMSE:
    def test_perfect_prediction(self):
        values = jnp.array([1.0, 2.0, 3.0])
        assert calculate_mse(values, values) == 0.0

    def test_different_errors(self):
        predictions = jnp.array([1.0, 2.0, 3.0])
        targets = jnp.array([1.1, 1.9, 3.2])
        assert calculate_mse(predictions, targets) == pytest.approx((0.01 + 0.01 + 0.04) / 3)

    def test_shape_mismatch(self):
        with pytest.raises(ValueError, match="Shape mismatch"):
            calculate_mse(jnp.ones(3), jnp.ones(4))


class TestCalculateMAE:
    def test_negative_values(self):
        assert calculate_mae(jnp.array([-1.0, 0.0, 1.0]), jnp.array([-1.5, 0.5, 1.5])) == pytest.approx(0.5)


class TestAccuracy:
    def test_label_ids(self):
        assert accuracy_score(jnp.array([0.0, 1.0, 2.0, 1.0]), jnp.array([0.0, 1.0, 1.0, 1.0])) == 0.75

    def test_probabilities(self):
        proba = jnp.array([[0.9, 0.1], [0.2, 0.8], [0.6, 0.4]])
        assert accuracy_score(proba, jnp.array([0, 1, 1])) == pytest.approx(2 / 3)
