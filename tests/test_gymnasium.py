import numpy as np
import pytest

from jump_bench import EnvConfig, InvalidAction, JumpEnv, JumpEnv_Gymnasium
from jump_bench.wrappers import GymnasiumWrapper


def test_spaces_and_reset():
    env = JumpEnv_Gymnasium(size=10)
    obs, info = env.reset(seed=42)

    assert env.action_space.n == 2
    assert env.observation_space.shape == (10, 10, 4)
    assert obs.shape == (10, 10, 4)
    assert obs.dtype == np.uint8
    assert env.observation_space.contains(obs)
    assert (obs.sum(axis=-1) == 1).all()
    assert info["seed"] == 42


def test_step_before_reset():
    env = JumpEnv_Gymnasium(size=10)
    with pytest.raises(RuntimeError):
        env.step(0)


def test_invalid_action():
    env = JumpEnv_Gymnasium(size=10)
    env.reset(seed=0)
    with pytest.raises(InvalidAction):
        env.step(3)


def test_step_types():
    env = JumpEnv_Gymnasium(size=10)
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(1)

    assert isinstance(reward, float)
    assert isinstance(terminated, bool)
    assert isinstance(truncated, bool)
    assert info["player_y"] == 6
    assert info["jump_count"] == 1
    assert info["timestep"] == 1


def test_terminates_on_collision():
    env = JumpEnv_Gymnasium(size=7)
    env.reset(seed=0)
    results = [env.step(0) for _ in range(4)]
    assert [r[1] for r in results] == [0.0, 0.0, 0.0, -1.0]
    assert results[-1][2]


def test_truncation_override():
    env = JumpEnv_Gymnasium(size=20, episode_length=2)
    env.reset(seed=0)
    env.step(0)
    _, _, terminated, truncated, _ = env.step(0)
    assert truncated and not terminated


def test_seed_determinism():
    a = JumpEnv_Gymnasium(size=12)
    b = JumpEnv_Gymnasium(size=12)
    obs_a, _ = a.reset(seed=3)
    obs_b, _ = b.reset(seed=3)
    for tick in range(20):
        obs_a = a.step(tick % 2)[0]
        obs_b = b.step(tick % 2)[0]
    np.testing.assert_array_equal(obs_a, obs_b)


def test_ansi_render():
    env = JumpEnv_Gymnasium(size=8, render_mode="ansi")
    assert env.render() is None
    env.reset(seed=0)
    assert env.render().count("@") == 1


def test_bad_render_mode():
    with pytest.raises(ValueError):
        JumpEnv_Gymnasium(render_mode="human")


def test_config_path(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("size: 9\n")
    env = JumpEnv_Gymnasium(config_path=str(path))
    assert env.observation_space.shape == (9, 9, 4)


def test_wrap_existing_env():
    env = GymnasiumWrapper(JumpEnv(EnvConfig(size=11)))
    obs, _ = env.reset(seed=1)
    assert obs.shape == (11, 11, 4)
