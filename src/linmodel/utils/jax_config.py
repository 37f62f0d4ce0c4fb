"""Common JAX configuration utilities for linmodel."""

from __future__ import annotations

import os
import threading

import jax

_CONFIG_LOCK = threading.Lock()
_CONFIGURED = False


def ensure_x64_enabled() -> bool:
    """Switch JAX to float64 once per process and report whether it is active.

    Loss values and gradient checks are compared at float64 tolerances, so the
    package enables this on import, before any array is built.
    """
    global _CONFIGURED
    if not _CONFIGURED:
        with _CONFIG_LOCK:
            if not _CONFIGURED:
                os.environ.setdefault("JAX_ENABLE_X64", "True")
                try:
                    jax.config.update("jax_enable_x64", True)
                finally:
                    _CONFIGURED = True
    return bool(jax.config.read("jax_enable_x64"))


__all__ = ["ensure_x64_enabled"]
