"""Core environment components for the jump environment.

This package contains the pure functional core of the environment:
- State representation (EnvState)
- Configuration dataclass (EnvConfig)
- Main environment logic (JumpEnv)
- Error types (InvalidConfiguration, InvalidAction)
"""

from __future__ import annotations

from .config import EnvConfig
from .environment import ACTIONS, JUMP, NOOP, JumpEnv, validate_action
from .errors import InvalidAction, InvalidConfiguration, JumpEnvError
from .state import EnvState

__all__ = [
    "EnvState",
    "EnvConfig",
    "JumpEnv",
    "ACTIONS",
    "NOOP",
    "JUMP",
    "validate_action",
    "JumpEnvError",
    "InvalidConfiguration",
    "InvalidAction",
]
