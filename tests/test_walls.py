import jax
import jax.numpy as jnp
import pytest

from jump_bench.systems.walls import (
    WallConfig,
    initial_walls,
    rightmost_column,
    sample_gap,
    scroll_walls,
    spawn_bounds,
    spawn_wall,
)

from conftest import make_walls


def active_walls(walls):
    walls = jax.device_get(walls)
    return sorted((int(x), int(y)) for x, y, a in zip(walls.x, walls.y, walls.active) if a)


def test_initial_walls_single_wall_on_right_edge():
    walls = initial_walls(10, 9, 4)
    assert active_walls(walls) == [(9, 4)]
    assert walls.x.shape == (10,)


def test_scroll_moves_left_and_keeps_rows():
    walls = scroll_walls(make_walls([(5, 4), (9, 5)]))
    assert active_walls(walls) == [(4, 4), (8, 5)]


def test_scroll_removes_walls_past_left_edge():
    walls = scroll_walls(make_walls([(0, 4), (3, 4)]))
    assert active_walls(walls) == [(2, 4)]


def test_rightmost_column():
    assert int(rightmost_column(make_walls([(2, 4), (7, 4)]))) == 7
    assert int(rightmost_column(make_walls([]))) == -1


@pytest.mark.parametrize(
    "size,rest_y,cfg,expected",
    [
        (10, 4, WallConfig(), (5, 8, 1)),
        (7, 3, WallConfig(), (5, 6, 1)),
        (6, 3, WallConfig(), (5, 5, 0)),
        (20, 7, WallConfig(max_wall_offset=0), (5, 8, 0)),
        (20, 7, WallConfig(max_wall_offset=5), (5, 8, 1)),
        (10, 4, WallConfig(min_wall_spacing=2, max_wall_spacing=3), (2, 3, 1)),
    ],
)
def test_spawn_bounds(size, rest_y, cfg, expected):
    assert spawn_bounds(cfg, size, rest_y, apex=3) == expected


def test_spawn_when_board_empty(key):
    walls, next_gap = spawn_wall(key, make_walls([]), jnp.int32(5), 10, 4, 5, 8, 0)
    assert active_walls(walls) == [(9, 4)]
    assert 5 <= int(next_gap) <= 8


def test_no_spawn_until_gap_reached(key):
    walls, next_gap = spawn_wall(key, make_walls([(5, 4)]), jnp.int32(5), 10, 4, 5, 8, 0)
    assert active_walls(walls) == [(5, 4)]
    assert int(next_gap) == 5


def test_spawn_once_gap_reached(key):
    walls, _ = spawn_wall(key, make_walls([(4, 4)]), jnp.int32(5), 10, 4, 5, 8, 0)
    assert active_walls(walls) == [(4, 4), (9, 4)]


def test_spawn_reuses_free_slot(key):
    start = make_walls([(4, 4)])
    start = start.replace(active=start.active.at[0].set(False).at[1].set(True), x=start.x.at[1].set(2), y=start.y.at[1].set(4))
    walls, _ = spawn_wall(key, start, jnp.int32(5), 10, 4, 5, 8, 0)
    assert bool(walls.active[0])
    assert int(walls.x[0]) == 9
    assert not bool(walls.cleared[0])


def test_spawn_offset_within_bounds():
    rows = set()
    for seed in range(50):
        walls, _ = spawn_wall(jax.random.PRNGKey(seed), make_walls([]), jnp.int32(5), 10, 4, 5, 8, 1)
        ((_, row),) = active_walls(walls)
        rows.add(row)
    assert rows == {4, 5}


def test_sample_gap_range():
    gaps = {int(sample_gap(jax.random.PRNGKey(s), 5, 8)) for s in range(50)}
    assert gaps <= {5, 6, 7, 8}
    assert len(gaps) > 1
