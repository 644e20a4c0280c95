"""Board representation for the playfield."""

from __future__ import annotations

import logging
from enum import IntEnum

import numpy as np
from numpy.typing import NDArray

from .tetromino import Tetromino


LOGGER = logging.getLogger(__name__)

# Dimensions of the playfield.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]


class Cell(IntEnum):
    """Value stored in each grid cell.

    Locked cells do not remember which kind of piece they came from.
    """

    EMPTY = 0
    OCCUPIED = 1


def create_empty_grid() -> Grid:
    """Return a new grid with every cell ``Cell.EMPTY``."""

    return np.full((HEIGHT, WIDTH), Cell.EMPTY, dtype=np.uint8)


class Board:
    """Playfield holding the locked cells."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get_cell(self, row: int, col: int) -> Cell:
        """Safely return the cell at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(row, col):
            return Cell(int(self.grid[row, col]))
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: Cell) -> None:
        """Safely set the cell at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(row, col):
            self.grid[row, col] = np.uint8(Cell(value))
        else:
            raise IndexError("Cell out of bounds")

    def is_occupied(self, row: int, col: int) -> bool:
        """Return ``True`` if ``(row, col)`` is on the board and occupied.

        Unlike :meth:`get_cell` this never raises; coordinates outside the
        grid simply hold nothing.
        """

        if self.in_bounds(row, col):
            return bool(self.grid[row, col] == Cell.OCCUPIED)
        return False

    def occupied_count(self) -> int:
        """Return how many cells are locked."""

        return int(np.count_nonzero(self.grid == Cell.OCCUPIED))

    def lock_piece(self, tetromino: Tetromino) -> int:
        """Write the tetromino's cells into the grid and return how many landed.

        Cells whose coordinates fall outside the grid are dropped rather than
        treated as an error.
        """

        coordinates = np.asarray(tetromino.blocks(), dtype=np.int16)
        rows, cols = coordinates.T
        inside = (rows >= 0) & (rows < self.height) & (cols >= 0) & (cols < self.width)
        dropped = int(np.count_nonzero(~inside))
        if dropped:
            LOGGER.debug("Dropped %d out-of-bounds cell(s) while locking %s", dropped, tetromino)

        self.grid[rows[inside], cols[inside]] = Cell.OCCUPIED
        return int(np.count_nonzero(inside))
