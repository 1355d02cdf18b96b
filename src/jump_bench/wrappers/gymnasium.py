"""Gymnasium-compatible wrapper for the jump environment.

Adapts the pure functional JumpEnv to the Gymnasium API.
Manages state externally and provides the familiar reset()/step() interface.
Observations are one-hot encoded here; the core keeps the Tile grid.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import jax
import jax.numpy as jnp
import numpy as np
from gymnasium import spaces

from ..core import EnvConfig, JumpEnv, validate_action
from ..systems.observation import NUM_TILES, one_hot
from ..systems.renderer import render_text


class JumpEnv_Gymnasium(gym.Env):
    """Gymnasium wrapper around JumpEnv.

    Attributes
    ----------
    jax_env : JumpEnv
        Underlying pure functional environment
    render_mode : Optional[str]
        Render mode ("ansi" or None)
    action_space : spaces.Discrete
        Discrete(2): 0 = NOOP, 1 = JUMP
    observation_space : spaces.Box
        Box(0, 1, (size, size, 4), uint8), one channel per Tile

    Notes
    -----
    Semantics:
    - Observation: one-hot tile grid, indexed [row, column, tile]
    - Reward: float in {-1.0, 0.0, 1.0}
    - Termination: collision with a wall
    - Truncation: ``t >= episode_length`` (when episode_length > 0)

    Examples
    --------
    >>> env = JumpEnv_Gymnasium(size=10, render_mode="ansi")
    >>> obs, info = env.reset(seed=42)
    >>> obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
    >>> print(env.render())
    """

    NOOP = JumpEnv.NOOP
    JUMP = JumpEnv.JUMP

    metadata = {"render_modes": ["ansi"], "render_fps": 10}

    def __init__(
        self,
        *,
        render_mode: Optional[str] = None,
        size: Optional[int] = None,
        episode_length: Optional[int] = None,
        config_path: Optional[str] = None,
        env_config: Optional[EnvConfig] = None,
        jax_env: Optional[JumpEnv] = None,
    ):
        """Initialize Gymnasium wrapper.

        Parameters
        ----------
        render_mode : Optional[str]
            "ansi" to return text from render(), or None
        size : Optional[int]
            Board size override
        episode_length : Optional[int]
            Truncation horizon override
        config_path : Optional[str]
            Path to YAML configuration file (load base config)
        env_config : Optional[EnvConfig]
            Complete EnvConfig object (overrides YAML and overrides)
        jax_env : Optional[JumpEnv]
            Pre-built environment to wrap (overrides everything)
        """
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(
                f"render_mode must be one of {self.metadata['render_modes']}, got {render_mode!r}."
            )
        self.render_mode = render_mode

        if jax_env is None:
            # Priority:
            # 1. env_config object (explicit)
            # 2. config_path (YAML) with size / episode_length overrides
            if env_config is None:
                if config_path:
                    from ..utils.config_loader import load_config_from_yaml
                    env_config = load_config_from_yaml(config_path)
                else:
                    env_config = EnvConfig()

                if size is not None or episode_length is not None:
                    env_config = EnvConfig(
                        size=env_config.size if size is None else size,
                        episode_length=(
                            env_config.episode_length if episode_length is None else episode_length
                        ),
                        physics=env_config.physics,
                        walls=env_config.walls,
                        rewards=env_config.rewards,
                    )

            self.jax_env = JumpEnv(env_config)
        else:
            self.jax_env = jax_env

        # Compiled once per wrapper instance
        self._reset_jit = jax.jit(self.jax_env.reset)
        self._step_jit = jax.jit(self.jax_env.step)

        n = self.jax_env.size
        self.action_space = spaces.Discrete(2)
        self.observation_space = spaces.Box(
            low=0,
            high=1,
            shape=(n, n, NUM_TILES),
            dtype=np.uint8,
        )

        self._state = None
        self._grid = None

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """Start a new episode.

        Parameters
        ----------
        seed : Optional[int]
            Random seed for reproducibility. Without a seed, the wrapper's
            Gymnasium ``np_random`` generator supplies one.
        options : Optional[Dict[str, Any]]
            Unused

        Returns
        -------
        obs : np.ndarray
            One-hot observation, shape (size, size, 4), dtype uint8
        info : Dict[str, Any]
            Info dictionary with the 32-bit seed used
        """
        super().reset(seed=seed, options=options)

        if seed is None:
            seed = int(self.np_random.integers(0, 2**32, dtype=np.uint64))
        seed32 = int(seed) & 0xFFFFFFFF

        grid, info = self._reset_jit(jax.random.PRNGKey(seed32))
        self._state = info["state"]
        self._grid = grid

        return self._encode(grid), {"seed": seed32}

    def step(self, action):
        """Execute one tick.

        Returns
        -------
        obs : np.ndarray
            One-hot observation, shape (size, size, 4), dtype uint8
        reward : float
        terminated : bool
            Collision with a wall
        truncated : bool
            Time limit reached
        info : Dict[str, Any]
            Scalar episode statistics
        """
        if self._state is None:
            raise RuntimeError("Call reset() before step().")

        a = validate_action(action)

        grid, reward, terminated, truncated, info = self._step_jit(self._state, jnp.int32(a))
        self._state = info["state"]
        self._grid = grid

        return_info = {
            "return": int(jax.device_get(info["return"])),
            "timestep": int(jax.device_get(info["timestep"])),
            "player_y": int(jax.device_get(info["player_y"])),
            "player_vy": int(jax.device_get(info["player_vy"])),
            "jump_count": int(jax.device_get(info["jump_count"])),
            "walls_cleared": int(jax.device_get(info["walls_cleared"])),
        }

        return (
            self._encode(grid),
            float(reward),
            bool(terminated),
            bool(truncated),
            return_info,
        )

    def render(self):
        """Render the current board as text.

        Returns
        -------
        text : Optional[str]
            Board as text when render_mode == "ansi" and an episode exists
        """
        if self.render_mode != "ansi" or self._grid is None:
            return None
        return render_text(jax.device_get(self._grid))

    def close(self):
        """Close environment (nothing to release)."""
        return None

    @staticmethod
    def _encode(grid) -> np.ndarray:
        return np.asarray(jax.device_get(one_hot(grid)))


class GymnasiumWrapper(JumpEnv_Gymnasium):
    """Gymnasium wrapper for an existing JumpEnv instance."""

    def __init__(self, jax_env: JumpEnv, *, render_mode: Optional[str] = None):
        super().__init__(render_mode=render_mode, jax_env=jax_env)
