"""Jump environment core.

Core environment implementation with:
- Immutable state (Flax struct dataclasses)
- Pure functions: reset(), step(), observe()
- JIT-friendly (no Python control flow on traced values)
- Static shapes (walls live in fixed-capacity arrays)
- Deterministic given the PRNG key

Usage
-----
Basic usage:

>>> import jax
>>> from jump_bench.core import JumpEnv, EnvConfig
>>>
>>> env = JumpEnv(EnvConfig(size=10))
>>> obs, info = env.reset(jax.random.PRNGKey(0))
>>> state = info["state"]
>>>
>>> obs, reward, terminated, truncated, info = env.step(state, JumpEnv.JUMP)
>>> print(env.render(info["state"]))

JIT compilation:

>>> reset_jit = jax.jit(env.reset)
>>> step_jit = jax.jit(env.step)

Vectorization (vmap):

>>> keys = jax.random.split(jax.random.PRNGKey(0), 100)
>>> obs, info = jax.vmap(env.reset)(keys)  # 100 parallel envs
"""

from __future__ import annotations

from dataclasses import astuple
from typing import Any, Dict, Tuple

import jax
import jax.numpy as jnp
import numpy as np

from .config import EnvConfig
from .errors import InvalidAction
from .state import EnvState
from ..systems.collision import resolve_collision
from ..systems.observation import NUM_TILES, tile_grid
from ..systems.physics import apply_physics, jump_apex
from ..systems.renderer import render_text
from ..systems.walls import initial_walls, sample_gap, scroll_walls, spawn_bounds, spawn_wall


NOOP = 0
JUMP = 1
ACTIONS = (NOOP, JUMP)


def validate_action(action) -> int:
    """Return ``action`` as a Python int, or raise InvalidAction.

    Accepts integer scalars (Python, NumPy or JAX). Floats, bools and
    non-scalar arrays are rejected rather than coerced.
    """
    arr = np.asarray(action)
    if arr.shape != () or not np.issubdtype(arr.dtype, np.integer):
        raise InvalidAction(
            f"Action must be an integer scalar in {ACTIONS}, got {action!r}."
        )
    a = int(arr)
    if a not in ACTIONS:
        raise InvalidAction(f"Action must be in {ACTIONS} (0=NOOP, 1=JUMP), got {a}.")
    return a


class JumpEnv:
    """Pure functional jump environment.

    All methods are pure functions operating on immutable EnvState.
    No mutable state in class; all state passed explicitly.

    Attributes
    ----------
    config : EnvConfig
        Environment configuration (validated)
    size : int
        Board size
    ground_height : int
        Floor row
    player_x : int
        Fixed player column
    rest_y : int
        Row the player stands on
    max_walls : int
        Capacity of the wall arrays (one wall per column at most)

    Action Space
    ------------
    Discrete {0, 1}:
        0 = NOOP
        1 = JUMP (only takes effect when grounded)

    Observation Space
    -----------------
    Tile grid: (size, size) int8 of ``Tile`` values, indexed [row, column],
    row 0 at the bottom.

    Reward
    ------
    clear_reward (+1) once per wall passed above, collision_reward (-1) on a hit.

    Episode Termination
    -------------------
    Terminated on collision. Truncated at t >= episode_length when enabled.
    A terminated state is frozen: further steps return it unchanged with reward 0.
    """

    NOOP = NOOP
    JUMP = JUMP

    def __init__(self, config: EnvConfig):
        """Initialize environment with configuration.

        Parameters
        ----------
        config : EnvConfig
            Complete environment configuration

        Notes
        -----
        Spawn ranges are resolved host-side here and embedded as constants
        in the JIT-compiled functions.
        """
        self.config = config

        self.size = config.size
        self.ground_height = config.ground_height
        self.player_x = config.player_x
        self.rest_y = config.rest_y
        self.max_walls = config.size

        self.min_gap, self.max_gap, self.max_offset = spawn_bounds(
            config.walls, config.size, config.rest_y, jump_apex(config.physics)
        )

    # Hashable so jax.jit can take the env as a static argument.
    def _static_key(self) -> Tuple:
        return astuple(self.config)

    def __hash__(self) -> int:
        return hash(self._static_key())

    def __eq__(self, other) -> bool:
        return isinstance(other, JumpEnv) and self._static_key() == other._static_key()

    def reset(self, key: jax.Array) -> Tuple[jnp.ndarray, Dict[str, Any]]:
        """Create the initial state of a new episode.

        Pure function: no side effects, deterministic given key.

        Parameters
        ----------
        key : jax.Array
            PRNG key, shape (2,), dtype uint32

        Returns
        -------
        obs : jnp.ndarray
            Initial tile grid, shape (size, size), dtype int8
        info : Dict[str, Any]
            Auxiliary information dictionary containing 'state'

        Notes
        -----
        The player rests at (player_x, rest_y) and one grounded wall sits on
        the rightmost column.
        """
        key, k_gap = jax.random.split(key)

        walls = initial_walls(self.max_walls, self.size - 1, self.rest_y)
        next_gap = sample_gap(k_gap, self.min_gap, self.max_gap)

        state = EnvState(
            player_y=jnp.int32(self.rest_y),
            player_vy=jnp.int32(0),
            walls=walls,
            next_gap=next_gap,
            done=jnp.array(False),
            t=jnp.int32(0),
            episode_return=jnp.int32(0),
            jump_count=jnp.int32(0),
            walls_cleared=jnp.int32(0),
            key=key,
        )

        obs = self.observe(state)
        info = {"state": state}
        return obs, info

    def step(
        self, state: EnvState, action: jax.Array
    ) -> Tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray, jnp.ndarray, Dict[str, Any]]:
        """Execute one environment tick.

        Pure function: step(state, action) -> (obs, reward, terminated, truncated, info)

        Parameters
        ----------
        state : EnvState
            Current environment state
        action : jax.Array
            0 (NOOP) or 1 (JUMP), shape (), dtype int32. Not validated here
            (traced values cannot raise); any value other than JUMP is a no-op.
            Host-side callers validate with ``validate_action``.

        Returns
        -------
        obs : jnp.ndarray
            Tile grid, shape (size, size), dtype int8
        reward : jnp.ndarray
            Scalar reward in {-1, 0, 1}, shape (), dtype int32
        terminated : jnp.ndarray
            Collision happened (now or earlier), shape (), dtype bool
        truncated : jnp.ndarray
            Time limit reached, shape (), dtype bool
        info : Dict[str, Any]
            Auxiliary info containing 'state', 'return', 'timestep',
            'player_y', 'player_vy', 'jump_count', 'walls_cleared', 'jumped'

        Notes
        -----
        Step workflow:
        1. Scroll walls one column left, drop those off the board
        2. Spawn a wall at the right edge when the spacing allows
        3. Apply the jump impulse (grounded only)
        4. Integrate player row with gravity
        5. Resolve collision and reward
        """
        if isinstance(state, dict):
            if "state" in state:
                raise TypeError(
                    "Received a dict instead of EnvState. "
                    "Did you pass the 'info' dict? Use 'info[\"state\"]' instead."
                )
            raise TypeError("Expected EnvState object, received dict.")

        a = jnp.asarray(action).astype(jnp.int32)
        jump_pressed = a == jnp.int32(self.JUMP)

        key, k_spawn = jax.random.split(state.key)

        # 1-2. Walls
        walls = scroll_walls(state.walls)
        walls, next_gap = spawn_wall(
            k_spawn,
            walls,
            state.next_gap,
            self.size,
            self.rest_y,
            self.min_gap,
            self.max_gap,
            self.max_offset,
        )

        # 3-4. Player
        player_y, player_vy, jumped = apply_physics(
            state.player_y,
            state.player_vy,
            jump_pressed,
            self.rest_y,
            self.size - 1,
            self.config.physics,
        )

        # 5. Collision and reward
        reward, collided, cleared, walls = resolve_collision(
            self.player_x, player_y, walls, self.config.rewards
        )

        next_state = EnvState(
            player_y=player_y,
            player_vy=player_vy,
            walls=walls,
            next_gap=next_gap,
            done=collided,
            t=state.t + jnp.int32(1),
            episode_return=state.episode_return + reward,
            jump_count=state.jump_count + jumped.astype(jnp.int32),
            walls_cleared=state.walls_cleared + cleared.astype(jnp.int32),
            key=key,
        )

        # A finished episode stays finished.
        next_state = jax.tree_util.tree_map(
            lambda old, new: jnp.where(state.done, old, new), state, next_state
        )
        reward = jnp.where(state.done, jnp.int32(0), reward)
        jumped = jumped & ~state.done

        terminated = next_state.done
        if self.config.episode_length > 0:
            truncated = next_state.t >= jnp.int32(self.config.episode_length)
        else:
            truncated = jnp.array(False)

        obs = self.observe(next_state)

        info = {
            "state": next_state,
            "return": next_state.episode_return,
            "timestep": next_state.t,
            "player_y": next_state.player_y,
            "player_vy": next_state.player_vy,
            "jump_count": next_state.jump_count,
            "walls_cleared": next_state.walls_cleared,
            "jumped": jumped,
        }

        return obs, reward, terminated, truncated, info

    def observe(self, state: EnvState) -> jnp.ndarray:
        """Project state onto the tile grid.

        Pure function: same state always produces the same grid.

        Returns
        -------
        grid : jnp.ndarray
            Shape (size, size), dtype int8, indexed [row, column]
        """
        return tile_grid(
            self.size,
            self.ground_height,
            self.player_x,
            state.player_y,
            state.walls,
        )

    def render(self, state: EnvState) -> str:
        """Render state as text (host-side, not JIT-compatible)."""
        return render_text(jax.device_get(self.observe(state)))

    @property
    def action_space(self):
        """Return Gymnasium action space."""
        from gymnasium import spaces
        return spaces.Discrete(len(ACTIONS))

    @property
    def observation_space(self):
        """Return Gymnasium observation space of the tile grid."""
        from gymnasium import spaces
        return spaces.Box(
            low=0,
            high=NUM_TILES - 1,
            shape=(self.size, self.size),
            dtype=np.int8,
        )
