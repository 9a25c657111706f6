# Shared helpers for presenters and headless runs: snapshots, board encoding, policies, episodes.
from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Callable, Optional

import numpy as np

try:
    from .game_logic import ACTIONS, DIRECTION_DELTAS, REVERSE_DIRECTION, Cell, SnakeGame
except ImportError:
    from game_logic import ACTIONS, DIRECTION_DELTAS, REVERSE_DIRECTION, Cell, SnakeGame


Policy = Callable[[SnakeGame], Optional[str]]


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a presenter needs to draw one frame."""
    width: int
    height: int
    body: tuple[Cell, ...]
    head: Cell
    food: Cell
    score: int
    game_over: bool


def snapshot(game: SnakeGame) -> GameSnapshot:
    return GameSnapshot(
        width=game.config.grid_width,
        height=game.config.grid_height,
        body=game.snake_body,
        head=game.snake_head,
        food=game.food_position,
        score=game.score,
        game_over=game.game_over,
    )


def encode_board_state(game: SnakeGame) -> np.ndarray:
    """
    Board as a (height, width) float32 grid:
    - 0.0: empty
    - 0.5: food
    - -0.5: snake body
    - 1.0: snake head
    """
    board = np.zeros((game.config.grid_height, game.config.grid_width), dtype=np.float32)

    fx, fy = game.food_position
    board[fy, fx] = 0.5

    # Body after food so an overlapping segment wins; head last.
    for x, y in game.snake_body[1:]:
        board[y, x] = -0.5
    hx, hy = game.snake_head
    board[hy, hx] = 1.0
    return board


def render_board(game: SnakeGame) -> str:
    """
    Text rendering, top row first:
    . = empty, F = food, o = body, H = head
    """
    glyphs = {0.0: ".", 0.5: "F", -0.5: "o", 1.0: "H"}
    board = encode_board_state(game)
    lines = ["".join(glyphs[float(value)] for value in row) for row in board]
    lines.append(f"Score: {game.score}")
    if game.game_over:
        lines.append("GAME OVER")
    return "\n".join(lines)


def _step_toward(head: Cell, direction: str) -> Cell:
    dx, dy = DIRECTION_DELTAS[direction]
    return head[0] + dx, head[1] + dy


def _safe_directions(game: SnakeGame) -> list[str]:
    """Non-reversing directions whose next cell is on the board and not body."""
    heading = game.snake.heading
    # The tail moves away this tick unless growth is owed.
    cells = game.snake_body if game.snake.grow_pending > 0 else game.snake_body[:-1]
    body = set(cells)
    safe = []
    for direction in ACTIONS:
        if direction == REVERSE_DIRECTION[heading]:
            continue
        x, y = _step_toward(game.snake_head, direction)
        if game.config.in_bounds(x, y) and (x, y) not in body:
            safe.append(direction)
    return safe


def random_turn_policy(rng: random.Random | None = None, turn_chance: float = 0.2) -> Policy:
    """Keep going straight, turn at random now and then, dodge walls when possible."""
    if not (0.0 <= turn_chance <= 1.0):
        raise ValueError("turn_chance must be between 0 and 1")
    rng = rng or random.Random()

    def policy(game: SnakeGame) -> Optional[str]:
        safe = _safe_directions(game)
        if not safe:
            return None
        heading = game.snake.heading
        if heading in safe and rng.random() >= turn_chance:
            return heading
        return rng.choice(safe)

    return policy


def greedy_food_policy(game: SnakeGame) -> Optional[str]:
    """Pick the safe direction that most reduces Manhattan distance to the food."""
    safe = _safe_directions(game)
    if not safe:
        return None
    fx, fy = game.food_position

    def distance(direction: str) -> int:
        x, y = _step_toward(game.snake_head, direction)
        return abs(fx - x) + abs(fy - y)

    return min(safe, key=distance)


def run_episode(
    game: SnakeGame,
    policy: Policy,
    max_steps: int = 1000,
    render_step: Callable[[SnakeGame, int], None] | None = None,
) -> tuple[int, int, int]:
    """Reset the game and play until game over or max_steps. Returns (score, length, steps)."""
    if max_steps <= 0:
        raise ValueError("max_steps must be > 0")

    game.reset()
    steps_taken = 0
    for step in range(max_steps):
        direction = policy(game)
        if direction is not None:
            game.set_direction(direction)
        alive = game.tick()
        steps_taken = step + 1

        if render_step is not None:
            render_step(game, step)
        if not alive:
            break

    return game.score, len(game.snake), steps_taken


def recent_mean(values: list[float], window: int = 10) -> float:
    """Mean of the last `window` values; 0.0 before anything has been recorded."""
    if window <= 0:
        raise ValueError("window must be > 0")
    if not values:
        return 0.0
    return float(np.mean(np.asarray(values[-window:], dtype=np.float32)))
