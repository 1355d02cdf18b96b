"""Environment systems (physics, walls, collision, observation, rendering)."""

from __future__ import annotations

from .collision import RewardConfig, resolve_collision
from .observation import NUM_TILES, Tile, one_hot, tile_grid, wall_mask
from .physics import PhysicsConfig, apply_physics, is_grounded, jump_apex
from .renderer import TILE_CHARS, render_text
from .walls import (
    WALL_HEIGHT,
    WallConfig,
    Walls,
    initial_walls,
    rightmost_column,
    sample_gap,
    scroll_walls,
    spawn_bounds,
    spawn_wall,
)

__all__ = [
    "RewardConfig",
    "resolve_collision",
    "NUM_TILES",
    "Tile",
    "one_hot",
    "tile_grid",
    "wall_mask",
    "PhysicsConfig",
    "apply_physics",
    "is_grounded",
    "jump_apex",
    "TILE_CHARS",
    "render_text",
    "WALL_HEIGHT",
    "WallConfig",
    "Walls",
    "initial_walls",
    "rightmost_column",
    "sample_gap",
    "scroll_walls",
    "spawn_bounds",
    "spawn_wall",
]
