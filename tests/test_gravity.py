import logging

from termtetris.board import Cell
from termtetris.game_state import SPAWN_KIND, GameState
from termtetris.tetromino import Tetromino, TetrominoType


def test_tick_moves_piece_down_one_row_until_blocked():
    state = GameState()
    ys = []
    for _ in range(17):
        assert state.tick() is False
        ys.append(state.active.y)
    assert ys == list(range(1, 18))
    assert state.active.x == 3


def test_lock_then_spawn_happen_in_the_same_tick():
    state = GameState()
    for _ in range(17):
        state.tick()
    resting = state.active

    assert state.tick() is True

    for row, col in resting.blocks():
        assert state.board.get_cell(row, col) is Cell.OCCUPIED
    assert state.board.occupied_count() == 4
    assert state.active == Tetromino(SPAWN_KIND, rotation=0, x=3, y=0)
    assert state.pieces == 1


def test_piece_straddling_floor_locks_in_place():
    state = GameState()
    state.active = Tetromino(TetrominoType.L, x=3, y=18)

    assert state.tick() is True

    # Row 19 receives the three-cell bar, the foot at row 20 is dropped.
    assert [state.board.get_cell(19, c) for c in (4, 5, 6)] == [Cell.OCCUPIED] * 3
    assert state.board.occupied_count() == 3
    assert (state.active.x, state.active.y, state.active.rotation) == (3, 0, 0)


def test_pieces_stack():
    state = GameState()
    while state.pieces < 2:
        state.tick()
    # Second L lands on top of the first: bar at row 16, foot at row 17.
    assert state.board.occupied_count() == 8
    assert state.board.get_cell(16, 5) is Cell.OCCUPIED
    assert state.board.get_cell(17, 4) is Cell.OCCUPIED


def test_tick_without_active_piece_is_noop():
    state = GameState()
    state.active = None
    assert state.tick() is False
    assert state.active is None
    assert state.board.occupied_count() == 0


def test_spawn_on_occupied_cells_is_not_rejected():
    state = GameState()
    state.board.grid[1:3, :] = Cell.OCCUPIED
    state.active = None
    state.spawn()
    assert state.active.y == 0

    # Descent is rejected straight away, so the overlapping piece locks again.
    assert state.tick() is True
    assert state.pieces == 1
    assert state.active == Tetromino(SPAWN_KIND, x=3, y=0)


def test_lock_and_spawn_are_logged(caplog):
    state = GameState()
    state.active = Tetromino(TetrominoType.O, x=0, y=17)
    with caplog.at_level(logging.DEBUG, logger="termtetris.game_state"):
        state.tick()
    assert "Locked" in caplog.text
    assert "Spawned" in caplog.text
