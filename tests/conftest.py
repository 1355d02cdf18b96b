import jax
import jax.numpy as jnp
import pytest

from jump_bench import EnvConfig, JumpEnv
from jump_bench.systems.walls import Walls


def make_walls(entries, capacity=10):
    """Build a Walls pytree from (column, bottom_row[, cleared]) tuples."""
    x = jnp.zeros(capacity, dtype=jnp.int32)
    y = jnp.zeros(capacity, dtype=jnp.int32)
    active = jnp.zeros(capacity, dtype=bool)
    cleared = jnp.zeros(capacity, dtype=bool)
    for i, entry in enumerate(entries):
        x = x.at[i].set(entry[0])
        y = y.at[i].set(entry[1])
        active = active.at[i].set(True)
        if len(entry) > 2:
            cleared = cleared.at[i].set(entry[2])
    return Walls(x=x, y=y, active=active, cleared=cleared)


@pytest.fixture
def key():
    return jax.random.PRNGKey(0)


@pytest.fixture
def env10():
    return JumpEnv(EnvConfig(size=10))


@pytest.fixture
def env7():
    return JumpEnv(EnvConfig(size=7))
