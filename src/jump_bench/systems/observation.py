"""Tile-grid observation of the jump environment.

The domain model is a grid of ``Tile`` values computed from the player
position and the wall arrays. The one-hot encoding is a separate, fixed-width
numeric view for learning pipelines and is only applied at the Gymnasium
boundary.

Grid layout: ``grid[row, column]`` with row 0 at the bottom of the board.
"""

from __future__ import annotations

from enum import IntEnum

import jax
import jax.numpy as jnp

from .walls import WALL_HEIGHT, Walls


class Tile(IntEnum):
    EMPTY = 0
    GROUND = 1
    PLAYER = 2
    WALL = 3


NUM_TILES = len(Tile)


def wall_mask(size: int, walls: Walls) -> jnp.ndarray:
    """Cells covered by any active wall, shape (size, size), dtype bool."""
    rows = jnp.arange(size, dtype=jnp.int32)[None, :, None]   # (1, size, 1)
    cols = jnp.arange(size, dtype=jnp.int32)[None, None, :]   # (1, 1, size)
    x = walls.x[:, None, None]
    y = walls.y[:, None, None]
    active = walls.active[:, None, None]

    covered = active & (cols == x) & (rows >= y) & (rows < y + WALL_HEIGHT)
    return jnp.any(covered, axis=0)


def tile_grid(
    size: int,
    ground_height: int,
    player_x: int,
    player_y: jnp.ndarray,
    walls: Walls,
) -> jnp.ndarray:
    """
    Project player, walls and ground onto a (size, size) int8 grid.

    Overlay priority: PLAYER > WALL > GROUND > EMPTY.
    """
    rows = jnp.arange(size, dtype=jnp.int32)[:, None]
    cols = jnp.arange(size, dtype=jnp.int32)[None, :]

    ground = jnp.broadcast_to(rows == ground_height, (size, size))
    wall = wall_mask(size, walls)
    player = (rows == player_y) & (cols == player_x)

    grid = jnp.where(
        player,
        jnp.int8(Tile.PLAYER),
        jnp.where(
            wall,
            jnp.int8(Tile.WALL),
            jnp.where(ground, jnp.int8(Tile.GROUND), jnp.int8(Tile.EMPTY)),
        ),
    )
    return grid.astype(jnp.int8)


def one_hot(grid: jnp.ndarray) -> jnp.ndarray:
    """Encode a tile grid as (size, size, NUM_TILES) uint8 channels."""
    return jax.nn.one_hot(grid, NUM_TILES, dtype=jnp.uint8)
