"""jump_bench: a minimal grid jumping environment for reinforcement learning.

A deterministic, discrete-time 2D grid simulation:
- A player on a fixed column jumps over two-row walls scrolling right to left
- +1 for clearing a wall, -1 and episode end on collision
- Pure functional, JIT-compilable core (Flax struct state)
- Stateful and Gymnasium-compatible wrappers

Quickstart
----------
```python
from jump_bench import JumpEnvironment

env = JumpEnvironment(12, seed=0)
score = 0
while not env.done:
    score += env.step(JumpEnvironment.JUMP)
    print(env)
```

Functional API
--------------
```python
import jax
from jump_bench import JumpEnv, EnvConfig

env = JumpEnv(EnvConfig(size=10))
obs, info = env.reset(jax.random.PRNGKey(0))
obs, reward, terminated, truncated, info = jax.jit(env.step)(info["state"], 1)
```

Gymnasium API
-------------
```python
from jump_bench import JumpEnv_Gymnasium

env = JumpEnv_Gymnasium(size=10, render_mode="ansi")
obs, info = env.reset(seed=42)
obs, reward, terminated, truncated, info = env.step(action)
```

Modules
-------
core
    Pure functional environment core (JumpEnv, EnvState, EnvConfig, errors)
systems
    Subsystems (physics, walls, collision, observation, rendering)
utils
    YAML configuration loading
wrappers
    Stateful, Gymnasium and JAX vectorization wrappers
"""

from __future__ import annotations

# Core API
from .core import (
    EnvConfig,
    EnvState,
    InvalidAction,
    InvalidConfiguration,
    JumpEnv,
    JumpEnvError,
)
from .systems import Tile, render_text
from .utils.config_loader import load_config_from_yaml, load_default_config

# Wrappers
from .wrappers import AutoResetWrapper, JumpEnv_Gymnasium, JumpEnvironment, LogWrapper


__version__ = "0.1.0"

__all__ = [
    # Core API
    "JumpEnv",
    "EnvState",
    "EnvConfig",
    "Tile",
    "render_text",
    "JumpEnvError",
    "InvalidConfiguration",
    "InvalidAction",
    "load_config_from_yaml",
    "load_default_config",
    # Wrappers
    "JumpEnvironment",
    "JumpEnv_Gymnasium",
    "AutoResetWrapper",
    "LogWrapper",
]
