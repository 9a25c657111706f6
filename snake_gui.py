# Tkinter presentation layer: draws SnakeGame snapshots and forwards key presses.
from __future__ import annotations

import argparse
import os
import sys
import tkinter as tk

# Support both package imports and running this file directly.
try:
    from .game_logic import CELL_SIZE, DEFAULT_FONT_PATH, FPS, GRID_HEIGHT, GRID_WIDTH, RandomCellSource, SnakeConfig, SnakeGame
    from .utils import GameSnapshot, snapshot
except ImportError:
    from game_logic import CELL_SIZE, DEFAULT_FONT_PATH, FPS, GRID_HEIGHT, GRID_WIDTH, RandomCellSource, SnakeConfig, SnakeGame
    from utils import GameSnapshot, snapshot


def font_asset_available(path: str) -> bool:
    return os.path.isfile(path)


def font_family(path: str) -> str:
    """Tk addresses fonts by family name; derive it from the asset file name."""
    stem = os.path.splitext(os.path.basename(path))[0]
    return stem or "Helvetica"


class SnakeApp:
    """Tkinter presentation layer for SnakeGame."""
    BG = "#000000"
    SNAKE_COLOR = "#00ff00"
    FOOD_COLOR = "#ff0000"
    TEXT_COLOR = "#ffffff"
    GAME_OVER_TEXT = "Game Over!\nPress R to restart"

    KEY_DIRECTIONS = {
        "<Up>": "up",
        "<Down>": "down",
        "<Left>": "left",
        "<Right>": "right",
        "w": "up",
        "s": "down",
        "a": "left",
        "d": "right",
    }

    def __init__(self, root: tk.Tk, game: SnakeGame, canvas: tk.Canvas | None = None) -> None:
        self.root = root
        self.game = game
        self.config = game.config
        self.family = font_family(self.config.font_path)
        self.after_id: str | None = None  # Tkinter timer id for the game loop

        self.root.title("Snake")
        self.root.resizable(False, False)
        if canvas is None:
            canvas = tk.Canvas(
                self.root,
                width=self.config.grid_width * self.config.cell_size,
                height=self.config.grid_height * self.config.cell_size,
                bg=self.BG,
                highlightthickness=0,
                bd=0,
            )
            canvas.pack()
        self.canvas = canvas

        self._bind_keys()
        self.root.protocol("WM_DELETE_WINDOW", self.close)

    def _bind_keys(self) -> None:
        for key, direction in self.KEY_DIRECTIONS.items():
            self.root.bind(key, lambda _e, d=direction: self.game.set_direction(d))
        self.root.bind("r", lambda _e: self.restart())
        self.root.bind("R", lambda _e: self.restart())

    def restart(self) -> None:
        """R only does something once the round is over."""
        if not self.game.game_over:
            return
        self.game.reset()
        self.draw()

    def start(self) -> None:
        self.draw()
        self.after_id = self.root.after(self.config.speed_ms, self.tick)

    def close(self) -> None:
        if self.after_id is not None:
            self.root.after_cancel(self.after_id)
            self.after_id = None
        self.root.destroy()

    def tick(self) -> None:
        """Single frame of the game loop; reschedules itself until the window closes."""
        if not self.game.game_over:
            self.game.tick()
        self.draw()
        self.after_id = self.root.after(self.config.speed_ms, self.tick)

    def draw(self) -> None:
        self.render(snapshot(self.game))

    def render(self, snap: GameSnapshot) -> None:
        """Render snake, food, score and the game-over banner."""
        self.canvas.delete("all")
        cell = self.config.cell_size

        for x, y in snap.body:
            self.canvas.create_rectangle(
                x * cell, y * cell, (x + 1) * cell, (y + 1) * cell, fill=self.SNAKE_COLOR, outline=""
            )

        fx, fy = snap.food
        self.canvas.create_rectangle(
            fx * cell, fy * cell, (fx + 1) * cell, (fy + 1) * cell, fill=self.FOOD_COLOR, outline=""
        )

        self.canvas.create_text(
            10, 10, anchor="nw", text=f"Score: {snap.score}", fill=self.TEXT_COLOR, font=(self.family, 18)
        )

        if snap.game_over:
            self.canvas.create_text(
                snap.width * cell // 2,
                snap.height * cell // 2,
                text=self.GAME_OVER_TEXT,
                fill=self.TEXT_COLOR,
                justify="center",
                font=(self.family, 36),
            )


def run_player_gui(config: SnakeConfig | None = None, seed: int | None = None) -> None:
    """Launch the Snake window and block until it is closed."""
    game = SnakeGame(config, food_source=RandomCellSource(seed))
    root = tk.Tk()
    app = SnakeApp(root, game)
    app.start()
    root.mainloop()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Snake")
    parser.add_argument("--width", type=int, default=GRID_WIDTH, help="Board width in cells")
    parser.add_argument("--height", type=int, default=GRID_HEIGHT, help="Board height in cells")
    parser.add_argument("--cell-size", type=int, default=CELL_SIZE, help="Cell size in pixels")
    parser.add_argument("--fps", type=int, default=FPS, help="Ticks per second")
    parser.add_argument("--font", default=DEFAULT_FONT_PATH, help="Font file required for on-screen text")
    parser.add_argument("--seed", type=int, default=None, help="Seed for food placement")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = SnakeConfig(
            grid_width=args.width,
            grid_height=args.height,
            cell_size=args.cell_size,
            fps=args.fps,
            font_path=args.font,
        )
    except ValueError as exc:
        print(f"Invalid setting: {exc}", file=sys.stderr)
        return 2

    if not font_asset_available(config.font_path):
        print(f"Font file not found: {config.font_path}", file=sys.stderr)
        return 1

    run_player_gui(config, seed=args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
