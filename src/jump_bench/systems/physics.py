from __future__ import annotations

import jax.numpy as jnp
from flax import struct


@struct.dataclass
class PhysicsConfig:
    """Discrete vertical physics for the jumping player.

    All velocities are in rows per tick.

    Attributes
    ----------
    jump_velocity : int
        Upward velocity applied on a grounded jump (default: 2)
    gravity : int
        Velocity lost per airborne tick (default: 1)
    """
    jump_velocity: int = 2    # rows/tick, positive = upward
    gravity: int = 1          # rows/tick^2


def jump_apex(cfg: PhysicsConfig) -> int:
    """
    Highest row offset above the resting row reached by a single jump.

    Host-side helper (plain Python ints), evaluated once per environment.
    Mirrors the integration in ``apply_physics`` on an unbounded board.
    """
    h, v, apex = 0, int(cfg.jump_velocity), 0
    while True:
        h = max(h + v, 0)
        v -= int(cfg.gravity)
        apex = max(apex, h)
        if h == 0:
            return apex


def is_grounded(
    y: jnp.ndarray,
    vy: jnp.ndarray,
    rest_y: int,
) -> jnp.ndarray:
    """
    Player stands on the ground: resting row and no vertical speed.

    Args:
        y: player row (int32)
        vy: player vertical velocity (int32)
        rest_y: row just above the ground

    Returns:
        bool scalar
    """
    return (y == rest_y) & (vy == 0)


def apply_physics(
    y: jnp.ndarray,
    vy: jnp.ndarray,
    jump_pressed: jnp.ndarray,  # bool
    rest_y: int,
    top_y: int,
    cfg: PhysicsConfig,
) -> tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray]:
    """
    Advance the player's vertical state by one tick.

    Args:
        y: current row (int32)
        vy: current vertical velocity (int32)
        jump_pressed: whether the jump action was taken this tick
        rest_y: resting row (ground height + 1)
        top_y: highest row on the board (size - 1)
        cfg: physics configuration

    Returns:
        (y_new, vy_new, jump_trigger)

    Physics order:
        1. Jump impulse, only when grounded (no double jumps)
        2. Integrate row, clamped to [rest_y, top_y]
        3. Apply gravity while airborne
        4. Zero velocity on landing
    """
    # 1. Jump.
    jump_trigger = jump_pressed & is_grounded(y, vy, rest_y)
    vy = jnp.where(jump_trigger, jnp.int32(cfg.jump_velocity), vy)

    # Apex ticks have vy == 0 while still above ground.
    airborne = (vy != 0) | (y > rest_y)

    # 2. Integrate.
    y_moved = jnp.clip(y + vy, rest_y, top_y)

    # 3. Gravity.
    vy_moved = vy - jnp.int32(cfg.gravity)

    # 4. Landing.
    landed = y_moved == rest_y
    vy_moved = jnp.where(landed, jnp.int32(0), vy_moved)

    y_new = jnp.where(airborne, y_moved, y).astype(jnp.int32)
    vy_new = jnp.where(airborne, vy_moved, vy).astype(jnp.int32)

    return y_new, vy_new, jump_trigger
