"""Utility helpers for the engine."""

from __future__ import annotations

from typing import Iterable, Optional

from .board import Board, Cell, Grid
from .tetromino import Tetromino


# Default gravity period used by the drivers.  The engine itself has no clock.
TICK_MS = 200

CELL_GLYPHS = {Cell.EMPTY: ". ", Cell.OCCUPIED: "# "}


def is_valid_position(board: Board, tetromino: Tetromino) -> bool:
    """Return ``True`` if ``tetromino`` may occupy its cells on ``board``.

    The side walls and the floor are hard limits.  The ceiling is not: a cell
    above row ``0`` has nothing to collide with and is accepted, which lets a
    piece's frame poke out of the top of the board.  Every movement and
    rotation must pass through this check before it is committed.
    """

    for row, col in tetromino.blocks():
        if col < 0 or col >= board.width or row >= board.height:
            return False
        if row >= 0 and board.grid[row, col] == Cell.OCCUPIED:
            return False
    return True


def render_grid(board: Board, active: Optional[Tetromino] = None) -> Grid:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece).  Active cells that fall outside the grid are not drawn.
    """

    grid = board.grid.copy()
    if active is not None:
        for r, c in active.blocks():
            if board.in_bounds(r, c):
                grid[r, c] = Cell.OCCUPIED
    return grid


def grid_to_text(grid: Iterable[Iterable[int]], line_end: str = "\n") -> str:
    """Format ``grid`` as text, one ``". "``/``"# "`` pair per cell."""

    return "".join(
        "".join(CELL_GLYPHS[Cell(int(cell))] for cell in row) + line_end for row in grid
    )
