import jax
import jax.numpy as jnp
import numpy as np
import pytest

from jump_bench import EnvConfig, JumpEnv, Tile
from jump_bench.core import validate_action


def run(env, state, actions):
    step = jax.jit(env.step)
    out = []
    for a in actions:
        obs, reward, terminated, truncated, info = step(state, jnp.int32(a))
        state = info["state"]
        out.append((int(reward), bool(terminated), bool(truncated), info))
    return state, out


def test_reset_layout(env10, key):
    obs, info = env10.reset(key)
    state = info["state"]

    assert obs.shape == (10, 10)
    assert obs.dtype == jnp.int8
    assert int(obs[4, 3]) == Tile.PLAYER
    assert int(obs[4, 9]) == Tile.WALL
    assert int(obs[5, 9]) == Tile.WALL
    assert int(state.t) == 0
    assert 5 <= int(state.next_gap) <= 8


def test_reset_deterministic(env10):
    _, a = env10.reset(jax.random.PRNGKey(5))
    _, b = env10.reset(jax.random.PRNGKey(5))
    for x, y in zip(jax.tree_util.tree_leaves(a["state"]), jax.tree_util.tree_leaves(b["state"])):
        np.testing.assert_array_equal(x, y)


def test_collision_terminates(env7, key):
    _, info = env7.reset(key)
    _, out = run(env7, info["state"], [0] * 4)
    rewards = [r for r, _, _, _ in out]
    assert rewards == [0, 0, 0, -1]
    assert out[-1][1]
    assert not any(term for _, term, _, _ in out[:-1])


def test_done_state_frozen(env7, key):
    _, info = env7.reset(key)
    state, _ = run(env7, info["state"], [0] * 4)
    frozen, out = run(env7, state, [1, 0, 1])

    assert [r for r, _, _, _ in out] == [0, 0, 0]
    assert all(term for _, term, _, _ in out)
    assert not any(bool(i["jumped"]) for _, _, _, i in out)
    for x, y in zip(jax.tree_util.tree_leaves(state), jax.tree_util.tree_leaves(frozen)):
        np.testing.assert_array_equal(x, y)


def test_truncation():
    env = JumpEnv(EnvConfig(size=20, episode_length=3))
    _, info = env.reset(jax.random.PRNGKey(1))
    _, out = run(env, info["state"], [0, 0, 0])
    assert [trunc for _, _, trunc, _ in out] == [False, False, True]
    assert not out[-1][1]


def test_no_truncation_when_disabled():
    env = JumpEnv(EnvConfig(size=20, episode_length=0))
    _, info = env.reset(jax.random.PRNGKey(1))
    _, out = run(env, info["state"], [0] * 5)
    assert not any(trunc for _, _, trunc, _ in out)


def test_step_info(env10, key):
    _, info = env10.reset(key)
    _, out = run(env10, info["state"], [0, 0, 0, 0, 1, 0])
    info = out[-1][3]

    assert int(info["timestep"]) == 6
    assert int(info["return"]) == 1
    assert int(info["walls_cleared"]) == 1
    assert int(info["jump_count"]) == 1
    assert int(info["player_y"]) == 7
    assert int(info["player_vy"]) == 0
    assert bool(out[4][3]["jumped"])


def test_info_dict_rejected(env10, key):
    _, info = env10.reset(key)
    with pytest.raises(TypeError, match="info"):
        env10.step(info, 0)


def test_env_hash_and_eq():
    a = JumpEnv(EnvConfig(size=10))
    b = JumpEnv(EnvConfig(size=10))
    c = JumpEnv(EnvConfig(size=11))
    assert a == b
    assert hash(a) == hash(b)
    assert a != c


def test_vmap_reset_and_step(env10):
    keys = jax.random.split(jax.random.PRNGKey(0), 4)
    obs, info = jax.vmap(env10.reset)(keys)
    assert obs.shape == (4, 10, 10)

    actions = jnp.array([0, 1, 0, 1], dtype=jnp.int32)
    obs, reward, terminated, truncated, info = jax.vmap(env10.step)(info["state"], actions)
    assert obs.shape == (4, 10, 10)
    assert reward.shape == (4,)
    np.testing.assert_array_equal(info["player_y"], [4, 6, 4, 6])


def test_render_text(env10, key):
    _, info = env10.reset(key)
    text = env10.render(info["state"])
    assert text.count("@") == 1
    assert len(text.splitlines()) == 12


def test_spaces(env10):
    assert env10.action_space.n == 2
    assert env10.observation_space.shape == (10, 10)


@pytest.mark.parametrize("action", [0, 1, np.int32(1), jnp.int32(0)])
def test_validate_action_accepts(action):
    assert validate_action(action) == int(action)
