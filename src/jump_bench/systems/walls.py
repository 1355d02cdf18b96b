from __future__ import annotations

from typing import Optional

from flax import struct
import jax
import jax.numpy as jnp


WALL_HEIGHT = 2   # rows covered by every wall


@struct.dataclass
class WallConfig:
    # Horizontal spacing (columns) between consecutive spawns, sampled per spawn
    min_wall_spacing: int = 5
    max_wall_spacing: int = 8

    # Vertical offset above the resting row, sampled per spawn.
    # None derives the largest offset the jump can still clear.
    max_wall_offset: Optional[int] = None


@struct.dataclass
class Walls:
    x: jnp.ndarray         # (max_walls,) int32, column
    y: jnp.ndarray         # (max_walls,) int32, bottom row
    active: jnp.ndarray    # (max_walls,) bool
    cleared: jnp.ndarray   # (max_walls,) bool, clear reward already paid


def spawn_bounds(
    cfg: WallConfig,
    size: int,
    rest_y: int,
    apex: int,
) -> tuple[int, int, int]:
    """Resolve (min_gap, max_gap, max_offset) for a board of ``size``.

    Spacing is capped at ``size - 1`` so a new wall spawns before the last one
    scrolls off the board. The offset keeps the wall top strictly below the
    highest row a jump reaches on this board.
    """
    max_gap = min(int(cfg.max_wall_spacing), size - 1)
    min_gap = min(int(cfg.min_wall_spacing), max_gap)

    reachable = min(apex, size - 1 - rest_y)
    max_offset = max(0, reachable - WALL_HEIGHT)
    if cfg.max_wall_offset is not None:
        max_offset = min(int(cfg.max_wall_offset), max_offset)
    return min_gap, max_gap, max_offset


def initial_walls(max_walls: int, x: int, y: int) -> Walls:
    """One wall in slot 0, all other slots empty."""
    return Walls(
        x=jnp.zeros(max_walls, dtype=jnp.int32).at[0].set(x),
        y=jnp.zeros(max_walls, dtype=jnp.int32).at[0].set(y),
        active=jnp.zeros(max_walls, dtype=bool).at[0].set(True),
        cleared=jnp.zeros(max_walls, dtype=bool),
    )


def sample_gap(key: jax.Array, min_gap: int, max_gap: int) -> jnp.ndarray:
    return jax.random.randint(key, (), min_gap, max_gap + 1, dtype=jnp.int32)


def scroll_walls(walls: Walls) -> Walls:
    """Shift active walls one column left; drop those leaving the board."""
    x = jnp.where(walls.active, walls.x - 1, walls.x)
    active = walls.active & (x >= 0)
    return walls.replace(x=x, active=active)


def rightmost_column(walls: Walls) -> jnp.ndarray:
    """Largest active wall column, or -1 when no wall is on the board."""
    return jnp.max(jnp.where(walls.active, walls.x, jnp.int32(-1)))


def spawn_wall(
    key: jax.Array,
    walls: Walls,
    next_gap: jnp.ndarray,
    size: int,
    rest_y: int,
    min_gap: int,
    max_gap: int,
    max_offset: int,
) -> tuple[Walls, jnp.ndarray]:
    """
    Spawn a wall at the right edge once the previous one is far enough away.

    Args:
        key: PRNG key for offset and next spacing
        walls: walls after scrolling
        next_gap: spacing required before the next spawn
        size: board size
        rest_y: resting row (lowest wall bottom)
        min_gap, max_gap: spacing range for the following spawn
        max_offset: largest vertical offset above rest_y

    Returns:
        (walls, next_gap)
    """
    k_offset, k_gap = jax.random.split(key)
    edge = jnp.int32(size - 1)

    rightmost = rightmost_column(walls)
    should_spawn = (rightmost < 0) | (edge - rightmost >= next_gap)

    offset = jax.random.randint(k_offset, (), 0, max_offset + 1, dtype=jnp.int32)
    slot = jnp.argmin(walls.active)  # first free slot

    spawned = Walls(
        x=walls.x.at[slot].set(edge),
        y=walls.y.at[slot].set(jnp.int32(rest_y) + offset),
        active=walls.active.at[slot].set(True),
        cleared=walls.cleared.at[slot].set(False),
    )
    walls = jax.tree_util.tree_map(
        lambda new, old: jnp.where(should_spawn, new, old), spawned, walls
    )
    next_gap = jnp.where(should_spawn, sample_gap(k_gap, min_gap, max_gap), next_gap)
    return walls, next_gap
