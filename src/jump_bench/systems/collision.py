from __future__ import annotations

import jax.numpy as jnp
from flax import struct

from .walls import WALL_HEIGHT, Walls


@struct.dataclass
class RewardConfig:
    """Reward values for wall encounters.

    Attributes
    ----------
    clear_reward : int
        Paid once per wall passed above its top row (default: 1)
    collision_reward : int
        Paid on the tick the player hits a wall; ends the episode (default: -1)
    """
    clear_reward: int = 1
    collision_reward: int = -1


def resolve_collision(
    player_x: int,
    player_y: jnp.ndarray,
    walls: Walls,
    cfg: RewardConfig,
) -> tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray, Walls]:
    """
    Compare the player against the wall sharing its column.

    Args:
        player_x: fixed player column
        player_y: player row after physics (int32)
        walls: walls after scroll and spawn
        cfg: reward configuration

    Returns:
        (reward, collided, cleared, walls) where cleared marks a wall passed
        above on this tick and walls has its cleared flags updated

    Passing beneath a raised wall is neither a hit nor a clear.
    """
    in_column = walls.active & (walls.x == player_x)
    top = walls.y + (WALL_HEIGHT - 1)

    hit = in_column & (player_y >= walls.y) & (player_y <= top)
    above = in_column & (player_y > top) & ~walls.cleared

    collided = jnp.any(hit)
    cleared_now = jnp.any(above) & ~collided

    reward = jnp.where(
        collided,
        jnp.int32(cfg.collision_reward),
        jnp.where(cleared_now, jnp.int32(cfg.clear_reward), jnp.int32(0)),
    )
    walls = walls.replace(cleared=walls.cleared | above)
    return reward, collided, cleared_now, walls
