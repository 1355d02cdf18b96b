"""Environment wrappers (stateful, Gymnasium, JAX vectorized)."""

from __future__ import annotations

from .gymnasium import GymnasiumWrapper, JumpEnv_Gymnasium
from .jax_wrappers import AutoResetWrapper, LogEnvState, LogWrapper
from .stateful import JumpEnvironment


__all__ = [
    "JumpEnvironment",
    "GymnasiumWrapper",
    "JumpEnv_Gymnasium",
    "AutoResetWrapper",
    "LogEnvState",
    "LogWrapper",
]
