import pytest

pytest.importorskip("tkinter")

from game_logic import ScriptedCellSource, SnakeGame  # noqa: E402
import snake_gui  # noqa: E402


def test_missing_font_exits_with_one(tmp_path, capsys, monkeypatch):
    def fail_gui(*_args, **_kwargs):
        raise AssertionError("window must not open without a font")

    monkeypatch.setattr(snake_gui, "run_player_gui", fail_gui)
    code = snake_gui.main(["--font", str(tmp_path / "missing.ttf")])
    assert code == 1
    assert "Font file not found" in capsys.readouterr().err


def test_present_font_launches_gui(tmp_path, monkeypatch):
    font = tmp_path / "arial.ttf"
    font.write_bytes(b"")
    launched = {}

    def fake_gui(config, seed=None):
        launched["config"] = config
        launched["seed"] = seed

    monkeypatch.setattr(snake_gui, "run_player_gui", fake_gui)
    code = snake_gui.main(["--font", str(font), "--fps", "20", "--seed", "9"])
    assert code == 0
    assert launched["config"].speed_ms == 50
    assert launched["config"].font_path == str(font)
    assert launched["seed"] == 9


def test_invalid_setting_exits_with_two(capsys):
    assert snake_gui.main(["--width", "0"]) == 2
    assert "grid_width must be > 0" in capsys.readouterr().err


@pytest.mark.parametrize(
    "path, family",
    [("arial.ttf", "arial"), ("fonts/DejaVuSans.ttf", "DejaVuSans"), ("", "Helvetica")],
)
def test_font_family_from_asset_name(path, family):
    assert snake_gui.font_family(path) == family


def test_font_asset_available(tmp_path):
    font = tmp_path / "f.ttf"
    assert snake_gui.font_asset_available(str(font)) is False
    font.write_bytes(b"x")
    assert snake_gui.font_asset_available(str(font)) is True


class FakeRoot:
    """Records what SnakeApp asks of the Tk root without opening a window."""

    def __init__(self):
        self.bindings = {}
        self.scheduled = []
        self.destroyed = False

    def title(self, _text):
        pass

    def resizable(self, *_args):
        pass

    def protocol(self, _name, _func):
        pass

    def bind(self, sequence, func):
        self.bindings[sequence] = func

    def after(self, delay, func):
        self.scheduled.append((delay, func))
        return f"after#{len(self.scheduled)}"

    def after_cancel(self, _after_id):
        pass

    def destroy(self):
        self.destroyed = True


class FakeCanvas:
    def __init__(self):
        self.rectangles = []
        self.texts = []

    def delete(self, _tag):
        self.rectangles.clear()
        self.texts.clear()

    def create_rectangle(self, *coords, **options):
        self.rectangles.append((coords, options))

    def create_text(self, *coords, **options):
        self.texts.append(options["text"])


def make_app(config=None):
    game = SnakeGame(config, food_source=ScriptedCellSource([(0, 0)] * 10))
    root = FakeRoot()
    canvas = FakeCanvas()
    return snake_gui.SnakeApp(root, game, canvas=canvas), root, canvas


def press(root, key):
    root.bindings[key](None)


def finish_game(app):
    while app.game.tick():
        pass
    assert app.game.game_over is True


def test_direction_keys_queue_turns():
    app, root, _ = make_app()
    press(root, "<Up>")
    press(root, "d")
    assert app.game.pending_directions == ("up", "right")


def test_direction_keys_ignored_after_game_over():
    app, root, _ = make_app()
    finish_game(app)
    press(root, "<Up>")
    press(root, "s")
    assert app.game.pending_directions == ()


def test_restart_key_ignored_while_running():
    app, root, _ = make_app()
    app.game.tick()
    body = app.game.snake_body
    press(root, "r")
    assert app.game.snake_body == body


@pytest.mark.parametrize("key", ["r", "R"])
def test_restart_key_resets_after_game_over(key):
    app, root, canvas = make_app()
    finish_game(app)
    press(root, key)
    assert app.game.game_over is False
    assert app.game.snake_body == ((20, 15),)
    assert app.game.score == 0
    assert "Score: 0" in canvas.texts


def test_tick_advances_and_reschedules():
    app, root, canvas = make_app()
    app.start()
    assert root.scheduled == [(100, app.tick)]

    app.tick()
    assert app.game.snake_head == (19, 15)
    assert len(root.scheduled) == 2
    assert len(canvas.rectangles) == 3  # two snake cells and the food


def test_tick_skips_game_update_after_game_over(monkeypatch):
    app, root, canvas = make_app()
    finish_game(app)
    calls = []
    monkeypatch.setattr(app.game, "tick", lambda: calls.append(1))

    app.tick()
    assert calls == []
    assert root.scheduled
    assert app.GAME_OVER_TEXT in canvas.texts


def test_close_destroys_root():
    app, root, _ = make_app()
    app.start()
    app.close()
    assert root.destroyed is True
    assert app.after_id is None
