"""State representation for the jump environment.

All state is a Flax struct dataclass for:
- Immutability
- JAX pytree compatibility (jit, vmap, tree_map)
- Clear type signatures
"""

from __future__ import annotations

import jax.numpy as jnp
from flax import struct

from ..systems.walls import Walls


@struct.dataclass
class EnvState:
    """Complete environment state (immutable JAX pytree).

    State is immutable; step() returns a new EnvState.

    Attributes
    ----------
    player_y : jnp.ndarray
        Player row, shape (), dtype int32. The column is fixed by the config.
    player_vy : jnp.ndarray
        Player vertical velocity in rows/tick, shape (), dtype int32
    walls : Walls
        Fixed-capacity wall arrays, each of shape (size,)
    next_gap : jnp.ndarray
        Columns the rightmost wall must travel before the next spawn, shape (), int32
    done : jnp.ndarray
        Episode ended by collision, shape (), dtype bool
    t : jnp.ndarray
        Ticks taken, shape (), dtype int32
    episode_return : jnp.ndarray
        Cumulative reward, shape (), dtype int32
    jump_count : jnp.ndarray
        Jumps actually triggered (grounded jump actions), shape (), dtype int32
    walls_cleared : jnp.ndarray
        Walls passed above, shape (), dtype int32
    key : jnp.ndarray
        PRNG key for wall spawning, shape (2,), dtype uint32
    """

    # Player
    player_y: jnp.ndarray
    player_vy: jnp.ndarray

    # Obstacles
    walls: Walls
    next_gap: jnp.ndarray

    # Episode
    done: jnp.ndarray
    t: jnp.ndarray
    episode_return: jnp.ndarray
    jump_count: jnp.ndarray
    walls_cleared: jnp.ndarray

    # Randomness
    key: jnp.ndarray
