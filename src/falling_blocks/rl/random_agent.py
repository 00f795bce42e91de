from __future__ import annotations

import argparse

import gymnasium as gym

import falling_blocks.env  # noqa: F401  ensure registration


def run_random(steps: int = 2000, seed: int | None = None) -> None:
    env = gym.make("FallingBlocks-10x20-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            print(f"episode {episodes}: score {info['score']} lines {info['lines_cleared']} level {info['level']}")
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episodes")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    return p


if __name__ == "__main__":  # pragma: no cover
    args = build_parser().parse_args()
    run_random(steps=args.steps, seed=args.seed)
