# Core Snake simulation: snake, food and tick rules, independent from GUI code.
from __future__ import annotations

from collections import deque
from itertools import islice
from dataclasses import dataclass
import random
from typing import Iterable, Protocol


# Reference board geometry and timing.
GRID_WIDTH = 40
GRID_HEIGHT = 30
CELL_SIZE = 20
FPS = 10
INITIAL_GROW = 3
FOOD_SCORE = 10
DEFAULT_FONT_PATH = "arial.ttf"

ACTIONS = ("up", "down", "left", "right")
REVERSE_DIRECTION = {"up": "down", "down": "up", "left": "right", "right": "left"}
DIRECTION_DELTAS = {"up": (0, -1), "down": (0, 1), "left": (-1, 0), "right": (1, 0)}

Cell = tuple[int, int]


@dataclass
class SnakeConfig:
    """Runtime settings shared between the logic layer and presenters."""
    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    cell_size: int = CELL_SIZE
    fps: int = FPS
    initial_grow: int = INITIAL_GROW
    food_score: int = FOOD_SCORE
    font_path: str = DEFAULT_FONT_PATH

    def __post_init__(self) -> None:
        for label, value in (
            ("grid_width", self.grid_width),
            ("grid_height", self.grid_height),
            ("cell_size", self.cell_size),
            ("fps", self.fps),
        ):
            if value <= 0:
                raise ValueError(f"{label} must be > 0")
        if self.initial_grow < 0:
            raise ValueError("initial_grow must be >= 0")
        if self.food_score < 0:
            raise ValueError("food_score must be >= 0")

    @property
    def speed_ms(self) -> int:
        return 1000 // self.fps

    @property
    def start_cell(self) -> Cell:
        return self.grid_width // 2, self.grid_height // 2

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.grid_width and 0 <= y < self.grid_height


class Snake:
    """Snake body, heading and deferred growth counter."""
    def __init__(self, config: SnakeConfig | None = None) -> None:
        self.config = config or SnakeConfig()
        self._body: deque[Cell] = deque()  # ordered body, head at index 0
        self.reset()

    def reset(self) -> None:
        """Restore the starting state: one cell at the centre, heading left."""
        self._body.clear()
        self._body.append(self.config.start_cell)
        self._heading = "left"
        self._grow_pending = self.config.initial_grow

    @property
    def heading(self) -> str:
        return self._heading

    @property
    def grow_pending(self) -> int:
        return self._grow_pending

    @property
    def head(self) -> Cell:
        return self._body[0]

    @property
    def body(self) -> tuple[Cell, ...]:
        return tuple(self._body)

    def __len__(self) -> int:
        return len(self._body)

    def set_direction(self, direction: str) -> None:
        """Change heading; reversing onto the neck is silently ignored."""
        if direction not in REVERSE_DIRECTION:
            return
        if REVERSE_DIRECTION[direction] == self._heading:
            return
        self._heading = direction

    def advance(self) -> bool:
        """Move one cell. Returns False (state untouched) if the move leaves the board."""
        dx, dy = DIRECTION_DELTAS[self._heading]
        head_x, head_y = self._body[0]
        new_x, new_y = head_x + dx, head_y + dy

        # Walls are lethal; there is no wraparound.
        if not self.config.in_bounds(new_x, new_y):
            return False

        self._body.appendleft((new_x, new_y))
        if self._grow_pending > 0:
            self._grow_pending -= 1
        else:
            self._body.pop()
        return True

    def grow(self) -> None:
        """Owe one more cell; it is paid out on a later advance()."""
        self._grow_pending += 1

    def check_self_collision(self) -> bool:
        head = self._body[0]
        return any(head == part for part in islice(self._body, 1, None))


class CellSource(Protocol):
    def next_cell(self, width: int, height: int) -> Cell: ...


class RandomCellSource:
    """Uniform, independent x/y draws over the whole board."""
    def __init__(self, seed: int | None = None) -> None:
        self.rng = random.Random(seed)

    def next_cell(self, width: int, height: int) -> Cell:
        return self.rng.randrange(width), self.rng.randrange(height)


class ScriptedCellSource:
    """Replays a fixed list of cells, e.g. for deterministic tests."""
    def __init__(self, cells: Iterable[Cell]) -> None:
        self.cells = list(cells)
        self._index = 0

    def next_cell(self, width: int, height: int) -> Cell:
        if self._index >= len(self.cells):
            raise IndexError("scripted cell source is exhausted")
        cell = self.cells[self._index]
        self._index += 1
        return cell


class Food:
    """A single food cell; respawn ignores where the snake is."""
    def __init__(self, config: SnakeConfig | None = None, source: CellSource | None = None) -> None:
        self.config = config or SnakeConfig()
        self.source = source if source is not None else RandomCellSource()
        self._position: Cell = (0, 0)
        self.respawn()

    @property
    def position(self) -> Cell:
        return self._position

    def respawn(self) -> None:
        self._position = self.source.next_cell(self.config.grid_width, self.config.grid_height)


class SnakeGame:
    """Tick controller: owns the snake, the food, the score and the game-over latch."""
    def __init__(self, config: SnakeConfig | None = None, food_source: CellSource | None = None) -> None:
        self.config = config or SnakeConfig()
        self.snake = Snake(self.config)
        self.food = Food(self.config, food_source)
        self.score = 0
        self.game_over = False
        self._pending: deque[str] = deque()  # direction requests, one applied per tick

    def reset(self) -> None:
        """Start a new round; this is the only way out of game over."""
        self.snake.reset()
        self.food.respawn()
        self.score = 0
        self.game_over = False
        self._pending.clear()

    @property
    def pending_directions(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def set_direction(self, direction: str) -> None:
        """Queue a turn. Only one request is applied per tick; the rest wait for later ticks."""
        if self.game_over:
            return
        self._pending.append(direction)

    def tick(self) -> bool:
        """Advance one step. Returns False if the snake dies (or is already dead)."""
        if self.game_over:
            return False

        # Checked against the heading of the last move, so two quick turns cannot reverse.
        if self._pending:
            self.snake.set_direction(self._pending.popleft())

        if not self.snake.advance():
            self.game_over = True
            return False

        # Food is resolved before the collision check.
        if self.snake.head == self.food.position:
            self.snake.grow()
            self.food.respawn()
            self.score += self.config.food_score

        if self.snake.check_self_collision():
            self.game_over = True
            return False
        return True

    @property
    def snake_body(self) -> tuple[Cell, ...]:
        return self.snake.body

    @property
    def snake_head(self) -> Cell:
        return self.snake.head

    @property
    def food_position(self) -> Cell:
        return self.food.position

    def check_self_collision(self) -> bool:
        return self.snake.check_self_collision()
