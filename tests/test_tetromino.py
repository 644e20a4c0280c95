import numpy as np
import pytest

from termtetris.tetromino import (
    FRAME_SIZE,
    ROTATIONS,
    SHAPES,
    Tetromino,
    TetrominoType,
    shape_blocks,
    shape_matrix,
)


@pytest.mark.parametrize("kind", list(TetrominoType))
@pytest.mark.parametrize("rotation", range(ROTATIONS))
def test_every_rotation_has_four_cells(kind, rotation):
    matrix = shape_matrix(kind, rotation)
    assert matrix.shape == (FRAME_SIZE, FRAME_SIZE)
    assert int(matrix.sum()) == 4
    assert len(shape_blocks(kind, rotation)) == 4


def test_table_covers_seven_kinds_in_order():
    assert SHAPES.shape == (7, ROTATIONS, FRAME_SIZE, FRAME_SIZE)
    assert [t.value for t in TetrominoType] == ["I", "L", "J", "O", "S", "T", "Z"]


def test_table_is_read_only():
    with pytest.raises(ValueError):
        shape_matrix(TetrominoType.T, 0)[0, 0] = 1


def test_l_spawn_orientation():
    expected = np.array(
        [[0, 0, 0, 0], [0, 1, 1, 1], [0, 1, 0, 0], [0, 0, 0, 0]], dtype=np.uint8
    )
    assert np.array_equal(shape_matrix(TetrominoType.L, 0), expected)
    assert shape_blocks(TetrominoType.L, 0) == [(1, 1), (1, 2), (1, 3), (2, 1)]


def test_rotation_index_wraps():
    assert np.array_equal(shape_matrix(TetrominoType.J, 5), shape_matrix(TetrominoType.J, 1))
    assert shape_blocks(TetrominoType.S, -1) == shape_blocks(TetrominoType.S, 3)


def test_candidates_are_new_objects():
    piece = Tetromino(TetrominoType.T, rotation=3, x=2, y=5)
    moved = piece.moved(-1, 1)
    rotated = piece.rotated()
    assert (moved.x, moved.y, moved.rotation) == (1, 6, 3)
    assert (rotated.x, rotated.y, rotated.rotation) == (2, 5, 0)
    assert piece == Tetromino(TetrominoType.T, rotation=3, x=2, y=5)


def test_blocks_are_offset_by_position():
    piece = Tetromino(TetrominoType.I, rotation=1, x=-1, y=4)
    assert piece.blocks() == [(4, 0), (5, 0), (6, 0), (7, 0)]
