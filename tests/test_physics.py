import jax.numpy as jnp
import pytest

from jump_bench.systems.physics import PhysicsConfig, apply_physics, is_grounded, jump_apex

REST = 4
TOP = 9


def run(jumps, y=REST, vy=0, cfg=PhysicsConfig(), top=TOP):
    """Apply physics for each entry of ``jumps``; return the visited (y, vy)."""
    y, vy = jnp.int32(y), jnp.int32(vy)
    trace = []
    for jump in jumps:
        y, vy, _ = apply_physics(y, vy, jnp.array(jump), REST, top, cfg)
        trace.append((int(y), int(vy)))
    return trace


def test_jump_apex_default():
    assert jump_apex(PhysicsConfig()) == 3


@pytest.mark.parametrize("velocity,expected", [(1, 1), (2, 3), (3, 6), (4, 10)])
def test_jump_apex_triangular(velocity, expected):
    assert jump_apex(PhysicsConfig(jump_velocity=velocity)) == expected


def test_standing_still_never_moves():
    assert run([False] * 10) == [(REST, 0)] * 10


def test_jump_arc_and_landing():
    trace = run([True] + [False] * 5)
    assert trace == [
        (REST + 2, 1),
        (REST + 3, 0),
        (REST + 3, -1),
        (REST + 2, -2),
        (REST, 0),
        (REST, 0),
    ]


def test_jump_while_airborne_is_noop():
    assert run([True, True, True, True, True]) == run([True, False, False, False, False])


def test_can_jump_again_after_landing():
    trace = run([True, False, False, False, False, True])
    assert trace[4] == (REST, 0)
    assert trace[5] == (REST + 2, 1)


def test_row_clamped_to_board_top():
    trace = run([True, False, False, False, False, False], top=REST + 2)
    assert max(y for y, _ in trace) == REST + 2
    assert trace[-1] == (REST, 0)


def test_is_grounded():
    assert bool(is_grounded(jnp.int32(REST), jnp.int32(0), REST))
    assert not bool(is_grounded(jnp.int32(REST + 1), jnp.int32(0), REST))
    assert not bool(is_grounded(jnp.int32(REST), jnp.int32(2), REST))


def test_jump_trigger_reported_only_when_grounded():
    _, _, triggered = apply_physics(jnp.int32(REST), jnp.int32(0), jnp.array(True), REST, TOP, PhysicsConfig())
    assert bool(triggered)
    _, _, triggered = apply_physics(jnp.int32(REST + 2), jnp.int32(1), jnp.array(True), REST, TOP, PhysicsConfig())
    assert not bool(triggered)
