"""Play Snake headlessly with a scripted policy and summarise the results."""
from __future__ import annotations

import argparse
import random

import numpy as np

try:
    from .game_logic import GRID_HEIGHT, GRID_WIDTH, RandomCellSource, SnakeConfig, SnakeGame
    from .utils import greedy_food_policy, random_turn_policy, recent_mean, render_board, run_episode
except ImportError:
    from game_logic import GRID_HEIGHT, GRID_WIDTH, RandomCellSource, SnakeConfig, SnakeGame
    from utils import greedy_food_policy, random_turn_policy, recent_mean, render_board, run_episode


POLICIES = ("random", "greedy")


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{raw!r} is not an integer")
    if value <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return value


def _print_metric(name: str, values: np.ndarray) -> None:
    print(
        f"{name:<12} {float(values.mean()):>10.2f} {float(np.median(values)):>10.2f} "
        f"{float(values.max()):>10.2f} {float(values.min()):>10.2f}"
    )


def play_headless(
    episodes: int = 20,
    max_steps: int = 2000,
    policy_name: str = "greedy",
    seed: int | None = None,
    config: SnakeConfig | None = None,
    show_board: bool = False,
) -> dict[str, np.ndarray]:
    """Run several games and print a summary. Returns the per-episode arrays."""
    if episodes <= 0:
        raise ValueError("episodes must be > 0")
    if policy_name not in POLICIES:
        raise ValueError(f"Unsupported policy: {policy_name}")

    rng = random.Random(seed)
    game = SnakeGame(config, food_source=RandomCellSource(rng.randrange(2**32)))
    policy = greedy_food_policy if policy_name == "greedy" else random_turn_policy(rng)

    scores: list[float] = []
    lengths: list[float] = []
    steps: list[float] = []

    print(f"Playing {episodes} episodes with the {policy_name} policy "
          f"on a {game.config.grid_width}x{game.config.grid_height} board")
    for episode in range(1, episodes + 1):
        score, length, taken = run_episode(game, policy, max_steps=max_steps)
        scores.append(float(score))
        lengths.append(float(length))
        steps.append(float(taken))

        if episode % 10 == 0 or episode == episodes:
            print(f"Episode {episode}/{episodes}  last score {score}  recent mean {recent_mean(scores):.1f}")
        if show_board:
            print(render_board(game))
            print()

    results = {
        "score": np.asarray(scores, dtype=np.float32),
        "length": np.asarray(lengths, dtype=np.float32),
        "steps": np.asarray(steps, dtype=np.float32),
    }

    print("=" * 56)
    print(f"{'Metric':<12} {'Mean':>10} {'Median':>10} {'Max':>10} {'Min':>10}")
    print("-" * 56)
    _print_metric("Score", results["score"])
    _print_metric("Length", results["length"])
    _print_metric("Steps", results["steps"])
    print("=" * 56)
    return results


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Headless Snake runs")
    parser.add_argument("--episodes", type=_positive_int, default=20, help="Number of games to play")
    parser.add_argument("--max-steps", type=_positive_int, default=2000, help="Tick limit per game")
    parser.add_argument("--policy", choices=POLICIES, default="greedy", help="Direction policy")
    parser.add_argument("--seed", type=int, default=None, help="Seed for food placement and policy")
    parser.add_argument("--width", type=_positive_int, default=GRID_WIDTH, help="Board width in cells")
    parser.add_argument("--height", type=_positive_int, default=GRID_HEIGHT, help="Board height in cells")
    parser.add_argument("--show-board", action="store_true", help="Print the final board of every game")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = SnakeConfig(grid_width=args.width, grid_height=args.height)
    play_headless(
        episodes=args.episodes,
        max_steps=args.max_steps,
        policy_name=args.policy,
        seed=args.seed,
        config=config,
        show_board=args.show_board,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
