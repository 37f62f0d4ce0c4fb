"""Unit tests for optimizer configuration, presets and the optax builder."""
import dataclasses

import jax.numpy as jnp
import optax
import pytest

from linmodel.core.identifiers import OptimizerKind
from linmodel.training import OPTIMIZER_PRESETS, OptimizerConfig, build_optimizer, get_optimizer_preset


def _config(**overrides):
    return dataclasses.replace(get_optimizer_preset("standard"), **overrides)


class TestPresets:
    @pytest.mark.parametrize("name", sorted(OPTIMIZER_PRESETS))
    def test_presets_are_valid(self, name):
        preset = get_optimizer_preset(name)
        assert preset.name == name
        assert preset.validate() is preset

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="not found"):
            get_optimizer_preset("missing")


class TestValidation:
    def test_string_optimizer_is_coerced(self):
        assert _config(optimizer="sgd").optimizer is OptimizerKind.SGD

    def test_unknown_optimizer(self):
        with pytest.raises(ValueError, match="unknown optimizer"):
            _config(optimizer="lbfgs")

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"learning_rate": 0.0}, "learning_rate must be positive"),
            ({"momentum": 1.0}, "momentum must be in"),
            ({"max_iter": 0}, "max_iter must be >= 1"),
            ({"tol": -1.0}, "tol must be non-negative"),
        ],
    )
    def test_invalid_values(self, overrides, message):
        with pytest.raises(ValueError, match=message):
            _config(**overrides).validate(context="fit")

    def test_to_dict_is_json_safe(self):
        data = get_optimizer_preset("gd").to_dict()
        assert data["optimizer"] == "sgd"
        assert data["max_iter"] == 5000
        assert isinstance(data["verbose"], bool)


class TestBuildOptimizer:
    @pytest.mark.parametrize("kind, momentum", [("adam", 0.0), ("sgd", 0.0), ("sgd", 0.9)])
    def test_returns_gradient_transformation(self, kind, momentum):
        tx = build_optimizer(_config(optimizer=kind, momentum=momentum))
        params = jnp.ones(3)
        state = tx.init(params)
        updates, _ = tx.update(jnp.ones(3), state, params)
        new_params = optax.apply_updates(params, updates)
        assert bool(jnp.all(new_params < params))

    def test_sgd_step_size(self):
        tx = build_optimizer(_config(optimizer="sgd", learning_rate=0.5, momentum=0.0))
        params = jnp.zeros(2)
        updates, _ = tx.update(jnp.array([1.0, -2.0]), tx.init(params), params)
        assert jnp.allclose(updates, jnp.array([-0.5, 1.0]))


class TestOptimizerConfigFields:
    def test_requires_every_field(self):
        with pytest.raises(TypeError):
            OptimizerConfig(name="partial", optimizer="adam", learning_rate=0.1)
