"""Stateful wrapper: one mutable episode per instance.

Adapts the pure functional JumpEnv to the construct / step / observe
contract used by simple driver loops:

>>> env = JumpEnvironment(12, seed=0)
>>> while not env.done:
...     reward = env.step(0)
>>> print(env)

A new episode is a new instance; there is no reset().
"""

from __future__ import annotations

from functools import partial
from typing import List, Optional, Tuple

import jax
import jax.numpy as jnp
import numpy as np

from ..core import EnvConfig, EnvState, InvalidConfiguration, JumpEnv, validate_action
from ..systems.observation import Tile
from ..systems.renderer import render_text


# Shared across instances: compiled once per distinct config.
@partial(jax.jit, static_argnums=0)
def _reset(env: JumpEnv, key: jax.Array):
    return env.reset(key)


@partial(jax.jit, static_argnums=0)
def _step(env: JumpEnv, state: EnvState, action: jax.Array):
    return env.step(state, action)


class JumpEnvironment:
    """Mutable jump environment owning a single episode.

    Parameters
    ----------
    size : Optional[int]
        Board size, must be > 5. Defaults to ``config.size`` or 12.
    seed : int
        Seed for the wall-spawn PRNG (ignored when ``key`` is given)
    key : Optional[jax.Array]
        Explicit PRNG key, the injectable randomness source
    config : Optional[EnvConfig]
        Full configuration; ``size`` must agree with it when both are given

    Raises
    ------
    InvalidConfiguration
        If the size is <= 5 or disagrees with ``config``.

    Notes
    -----
    Each ``step`` is one atomic transition: the new EnvState replaces the old
    one only after the compiled transition has returned.
    """

    NOOP = JumpEnv.NOOP
    JUMP = JumpEnv.JUMP

    def __init__(
        self,
        size: Optional[int] = None,
        *,
        seed: int = 0,
        key: Optional[jax.Array] = None,
        config: Optional[EnvConfig] = None,
    ):
        if config is None:
            config = EnvConfig(size=12 if size is None else size)
        elif size is not None and size != config.size:
            raise InvalidConfiguration(
                f"size={size} disagrees with config.size={config.size}"
            )

        self.jax_env = JumpEnv(config)
        self.config = config

        if key is None:
            key = jax.random.PRNGKey(seed)
        obs, info = _reset(self.jax_env, key)

        self._state: EnvState = info["state"]
        self._obs = obs
        self.last_reward = 0

    # Contract

    def step(self, action) -> int:
        """Advance the world by one tick and return the reward.

        Raises
        ------
        InvalidAction
            If ``action`` is not 0 or 1. State is left untouched.
        """
        a = validate_action(action)

        obs, reward, terminated, truncated, info = _step(
            self.jax_env, self._state, jnp.int32(a)
        )

        self._state = info["state"]
        self._obs = obs
        self.last_reward = int(reward)

        if __debug__:
            self._check_invariants()

        return self.last_reward

    def observe(self) -> np.ndarray:
        """Tile grid of shape (size, size), indexed [row, column], read-only."""
        grid = np.array(jax.device_get(self._obs))
        grid.setflags(write=False)
        return grid

    # Alias used by renderers and policies.
    state_grid = observe

    @property
    def done(self) -> bool:
        return bool(self._state.done)

    # Read-only views

    @property
    def state(self) -> EnvState:
        """Underlying immutable EnvState."""
        return self._state

    @property
    def size(self) -> int:
        return self.jax_env.size

    @property
    def ground_height(self) -> int:
        return self.jax_env.ground_height

    @property
    def player(self) -> Tuple[int, int]:
        """Player position as (column, row)."""
        return self.jax_env.player_x, int(self._state.player_y)

    @property
    def player_velocity(self) -> int:
        return int(self._state.player_vy)

    @property
    def walls(self) -> List[Tuple[int, int]]:
        """Active walls as (column, bottom_row), ordered left to right."""
        walls = jax.device_get(self._state.walls)
        return sorted(
            (int(x), int(y))
            for x, y, active in zip(walls.x, walls.y, walls.active)
            if active
        )

    @property
    def t(self) -> int:
        return int(self._state.t)

    @property
    def episode_return(self) -> int:
        return int(self._state.episode_return)

    def __str__(self) -> str:
        return render_text(self.observe())

    def __repr__(self) -> str:
        col, row = self.player
        return (
            f"JumpEnvironment(size={self.size}, t={self.t}, player=({col}, {row}), "
            f"walls={self.walls}, done={self.done})"
        )

    def _check_invariants(self) -> None:
        grid = np.asarray(jax.device_get(self._obs))
        n_player = int(np.count_nonzero(grid == Tile.PLAYER))
        n_wall = int(np.count_nonzero(grid == Tile.WALL))
        assert n_player == 1, f"expected exactly one player cell, found {n_player}"
        assert n_wall > 0, "no wall on the board"
