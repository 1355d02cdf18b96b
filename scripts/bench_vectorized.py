import time
import argparse

import jax
import jax.numpy as jnp
from rich.progress import BarColumn, Progress, TimeRemainingColumn

import os
os.environ["ABSL_MIN_LOG_LEVEL"] = "2"
os.environ["TF_CPP_MIN_LOG_LEVEL"] = "2"

from jump_bench import AutoResetWrapper, EnvConfig, JumpEnv, LogWrapper, load_config_from_yaml


def main(
    n_envs: int = 4096,
    n_steps: int = 10000,
    warmup_steps: int = 3,
    config_path: str = None,
    block_size: int = 1000,
) -> int:
    print(f"JAX version: {jax.__version__}")
    print(f"JAX devices: {jax.devices()}")
    print(f"JAX backend: {jax.default_backend()}")
    print()

    if config_path:
        print(f"Loading config from: {config_path}")
        config = load_config_from_yaml(config_path)
    else:
        config = EnvConfig()

    print(f"Board: {config.size}x{config.size}")
    env = LogWrapper(AutoResetWrapper(JumpEnv(config)))

    step_vmap = jax.vmap(env.step, in_axes=(0, 0, 0))

    # A block of steps inside one lax.scan keeps the loop on device.
    @jax.jit
    def run_block(carry, keys):
        def scan_fn(carry, step_key):
            state, finished, total_return = carry
            k_act, k_reset = jax.random.split(step_key)
            actions = jax.random.randint(k_act, (n_envs,), 0, 2)
            reset_keys = jax.random.split(k_reset, n_envs)

            _, _, _, _, info = step_vmap(state, actions, reset_keys)

            finished = finished + jnp.sum(info["returned_episode"].astype(jnp.int32))
            total_return = total_return + jnp.sum(info["returned_episode_returns"])
            return (info["state"], finished, total_return), None

        carry, _ = jax.lax.scan(scan_fn, carry, keys)
        return carry

    reset_keys = jax.random.split(jax.random.PRNGKey(0), n_envs)
    _, info = jax.jit(jax.vmap(env.reset))(reset_keys)
    carry = (info["state"], jnp.int32(0), jnp.int32(0))

    print(f"Reset {n_envs} envs.")

    n_blocks = max(n_steps // block_size, 1)
    block_keys = jax.random.split(jax.random.PRNGKey(42), n_blocks * block_size).reshape(
        n_blocks, block_size, 2
    )

    print(f"Compiling JIT block (block_size={block_size})...")
    carry = run_block(carry, block_keys[0])
    jax.block_until_ready(carry[1])
    print("Compilation complete!")

    print(f"Warming up ({warmup_steps} blocks)...")
    for i in range(min(warmup_steps, n_blocks)):
        carry = run_block(carry, block_keys[i])
    jax.block_until_ready(carry[1])
    carry = (carry[0], jnp.int32(0), jnp.int32(0))
    print("Warmup complete, starting benchmark...\n")

    t0 = time.perf_counter()
    progress = Progress(
        "[progress.description]{task.description}",
        BarColumn(),
        "[progress.percentage]{task.percentage:>3.0f}%",
        "-",
        TimeRemainingColumn(),
    )
    with progress:
        task_id = progress.add_task("Benchmark", total=n_blocks)
        for i in range(n_blocks):
            carry = run_block(carry, block_keys[i])
            progress.update(task_id, advance=1)

    jax.block_until_ready(carry[1])
    elapsed = time.perf_counter() - t0

    total_steps = n_envs * n_blocks * block_size
    episodes = int(carry[1])
    mean_return = float(carry[2]) / episodes if episodes else float("nan")

    print()
    print(f"--- Results for {n_envs} parallel envs ---")
    print(f"Total steps: {total_steps}")
    print(f"Elapsed: {elapsed:.3f} s")
    print(f"Steps/sec (per env): {total_steps / (n_envs * elapsed):.1f}")
    print(f"FPS (Total throughput): {total_steps / elapsed:.1f}")
    print(f"Episodes finished: {episodes}, mean return (random policy): {mean_return:.3f}")
    print(f"-------------------------------------------")

    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Vectorized JAX benchmark with a random policy")
    parser.add_argument("--n_envs", type=int, default=4096, help="Number of parallel environments")
    parser.add_argument("--n_steps", type=int, default=10000, help="Number of benchmark steps")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML configuration file")
    parser.add_argument("--block_size", type=int, default=1000, help="Number of steps per JIT call")
    args = parser.parse_args()

    main(
        n_envs=args.n_envs,
        n_steps=args.n_steps,
        config_path=args.config,
        block_size=args.block_size,
    )
