"""
Watch a random agent play the jump environment in the terminal.

Usage:
    python scripts/play_random.py --size 12 --seed 0 --delay 0.1
"""
import argparse
import time

import numpy as np
from termcolor import colored

from jump_bench import JumpEnvironment, load_config_from_yaml


def main():
    parser = argparse.ArgumentParser(description="Random agent for the jump environment")
    parser.add_argument("--size", type=int, default=12, help="Board size (> 5)")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML configuration file")
    parser.add_argument("--seed", type=int, default=0, help="Seed for walls and actions")
    parser.add_argument("--delay", type=float, default=0.1, help="Seconds between frames")
    parser.add_argument("--max_steps", type=int, default=1000, help="Stop after this many ticks")
    args = parser.parse_args()

    if args.config:
        config = load_config_from_yaml(args.config)
        env = JumpEnvironment(config=config, seed=args.seed)
    else:
        env = JumpEnvironment(args.size, seed=args.seed)

    rng = np.random.default_rng(args.seed)
    score = 0

    while not env.done and env.t < args.max_steps:
        action = int(rng.integers(0, 2))
        score += env.step(action)

        # clear console and reset cursor
        print("\x1B[2J\x1B[1;1H", end="")

        print(env)
        print(f"Score={score} dead={env.done} t={env.t}")
        time.sleep(args.delay)

    status = colored("DEAD", "red", attrs=["bold"]) if env.done else colored("ALIVE", "green", attrs=["bold"])
    print(f"{status} after {env.t} ticks, score={score}")


if __name__ == "__main__":
    main()
