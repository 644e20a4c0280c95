import pytest

pygame = pytest.importorskip("pygame")

from termtetris.game_state import Direction, GameState
from termtetris.run_pygame import GameRunner, key_to_direction


def test_arrow_keys_map_to_directions():
    assert key_to_direction(pygame.K_UP) is Direction.ROTATE_CW
    assert key_to_direction(pygame.K_DOWN) is Direction.DOWN
    assert key_to_direction(pygame.K_LEFT) is Direction.LEFT
    assert key_to_direction(pygame.K_RIGHT) is Direction.RIGHT
    assert key_to_direction(pygame.K_SPACE) is None


def test_gravity_timer_ticks_once_per_period():
    runner = GameRunner(tick_ms=200)
    runner._state = GameState()
    assert runner.advance(150) is False
    assert runner.state.active.y == 0
    assert runner.advance(60) is True
    assert runner.state.active.y == 1


def test_paused_runner_ignores_input_and_time():
    runner = GameRunner()
    runner._state = GameState()
    runner._paused = True
    runner.handle_key(pygame.K_LEFT)
    assert runner.advance(1000) is False
    assert (runner.state.active.x, runner.state.active.y) == (3, 0)


def test_controls_ignored_when_not_running():
    runner = GameRunner()
    runner.pause()
    runner.stop()
    assert runner.paused is False
    assert runner.running is False


def test_p_toggles_pause_and_resume():
    runner = GameRunner()
    runner._state = GameState()
    runner._running = True
    runner.handle_key(pygame.K_p)
    assert runner.paused is True
    runner.handle_key(pygame.K_p)
    assert runner.paused is False
    runner.handle_key(pygame.K_LEFT)
    assert runner.state.active.x == 2


def test_escape_stops_running_game():
    runner = GameRunner()
    runner._state = GameState()
    runner._running = True
    runner.handle_key(pygame.K_ESCAPE)
    assert runner.running is False


def test_pygame_quit_runs_when_drawing_fails(monkeypatch):
    from termtetris import run_pygame

    calls = []

    class FakeScreen:
        def fill(self, _color):
            pass

    class FakeClock:
        def tick(self, _fps):
            return 16

    def broken_draw(_screen, _grid):
        raise RuntimeError("boom")

    monkeypatch.setattr(pygame, "init", lambda: calls.append("init"))
    monkeypatch.setattr(pygame, "quit", lambda: calls.append("quit"))
    monkeypatch.setattr(pygame.display, "set_mode", lambda _size: FakeScreen())
    monkeypatch.setattr(pygame.display, "set_caption", lambda _title: None)
    monkeypatch.setattr(pygame.time, "Clock", FakeClock)
    monkeypatch.setattr(pygame.event, "get", lambda: [])
    monkeypatch.setattr(run_pygame, "draw_grid", broken_draw)

    runner = GameRunner()
    with pytest.raises(RuntimeError):
        runner.start()

    assert calls == ["init", "quit"]
    assert runner.running is False
