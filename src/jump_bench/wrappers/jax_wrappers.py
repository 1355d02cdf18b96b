"""JAX-compatible wrappers for vectorized rollouts."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import jax
import jax.numpy as jnp
from flax import struct

from ..core import EnvState, JumpEnv


class AutoResetWrapper:
    """
    Start a fresh episode whenever the wrapped one ends.

    ``step(state, action, key)`` steps the environment and, if the episode
    terminated or was truncated, replaces the state with ``reset(key)``.

    Returns:
        - obs: observation of the fresh episode when done, else of the next state
        - reward, terminated, truncated: from the step that was just taken
        - info["state"]: state to feed into the next call
        - info["final_observation"], info["final_state"]: the step result
          before any reset, for bootstrapping value estimates
    """

    def __init__(self, env: JumpEnv):
        self.env = env

    def reset(self, key: jax.Array) -> Tuple[jnp.ndarray, Dict[str, Any]]:
        return self.env.reset(key)

    def step(
        self, state: EnvState, action: jax.Array, key: jax.Array
    ) -> Tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray, jnp.ndarray, Dict[str, Any]]:
        obs_st, reward, terminated, truncated, info_st = self.env.step(state, action)
        done = terminated | truncated

        obs_re, info_re = self.env.reset(key)

        obs = jnp.where(done, obs_re, obs_st)
        next_state = jax.tree_util.tree_map(
            lambda fresh, cont: jnp.where(done, fresh, cont),
            info_re["state"],
            info_st["state"],
        )

        info = dict(info_st)
        info["state"] = next_state
        info["final_observation"] = obs_st
        info["final_state"] = info_st["state"]
        return obs, reward, terminated, truncated, info

    def __getattr__(self, name):
        """Delegate unknown attributes to wrapped environment."""
        return getattr(self.env, name)


@struct.dataclass
class LogEnvState:
    env_state: Any
    episode_returns: jnp.ndarray
    episode_lengths: jnp.ndarray
    timestep: jnp.ndarray


class LogWrapper:
    """Track episode returns and lengths.

    Place it outside AutoResetWrapper: accumulators restart when an episode
    ends, and the finished episode's totals are reported once in
    ``returned_episode_returns`` / ``returned_episode_lengths`` (zero otherwise).
    """

    def __init__(self, env):
        self.env = env

    def reset(self, key: jax.Array) -> Tuple[jnp.ndarray, Dict[str, Any]]:
        obs, info = self.env.reset(key)
        info["state"] = LogEnvState(
            env_state=info["state"],
            episode_returns=jnp.int32(0),
            episode_lengths=jnp.int32(0),
            timestep=jnp.int32(0),
        )
        info["returned_episode_returns"] = jnp.int32(0)
        info["returned_episode_lengths"] = jnp.int32(0)
        info["returned_episode"] = jnp.array(False)
        return obs, info

    def step(
        self, state: LogEnvState, action: jax.Array, key: Optional[jax.Array] = None
    ) -> Tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray, jnp.ndarray, Dict[str, Any]]:
        if key is None:
            obs, reward, terminated, truncated, info = self.env.step(state.env_state, action)
        else:
            obs, reward, terminated, truncated, info = self.env.step(state.env_state, action, key)

        done = terminated | truncated
        new_return = state.episode_returns + reward
        new_length = state.episode_lengths + 1

        info["state"] = LogEnvState(
            env_state=info["state"],
            episode_returns=jnp.where(done, jnp.int32(0), new_return),
            episode_lengths=jnp.where(done, jnp.int32(0), new_length),
            timestep=state.timestep + 1,
        )
        info["returned_episode_returns"] = jnp.where(done, new_return, jnp.int32(0))
        info["returned_episode_lengths"] = jnp.where(done, new_length, jnp.int32(0))
        info["returned_episode"] = done
        info["timestep"] = state.timestep + 1
        return obs, reward, terminated, truncated, info

    def __getattr__(self, name):
        """Delegate unknown attributes to wrapped environment."""
        return getattr(self.env, name)
