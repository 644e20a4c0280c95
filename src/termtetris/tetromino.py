"""Tetromino definitions and the static shape table.

Every piece lives inside a fixed 4x4 frame.  ``SHAPES`` stores one occupancy
matrix per ``(kind, rotation)`` pair; successive rotation indices describe
successive 90 degree clockwise turns.  The table is read-only and shared, so
lookups hand out views rather than copies.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Tuple

import numpy as np
from numpy.typing import NDArray

Offsets = List[Tuple[int, int]]

# Size of the square bounding frame and number of rotation states per kind.
FRAME_SIZE = 4
ROTATIONS = 4


class TetrominoType(str, Enum):
    """Enumeration of the seven tetromino kinds, in shape table order."""

    I = "I"
    L = "L"
    J = "J"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"


_KIND_INDEX: Dict[TetrominoType, int] = {t: i for i, t in enumerate(TetrominoType)}


# kind x rotation x row x column
SHAPES: NDArray[np.uint8] = np.array(
    [
        # I
        [
            [[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]],
            [[0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0]],
            [[0, 0, 0, 0], [0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0]],
            [[0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 1, 0]],
        ],
        # L
        [
            [[0, 0, 0, 0], [0, 1, 1, 1], [0, 1, 0, 0], [0, 0, 0, 0]],
            [[0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 1, 1], [0, 0, 0, 0]],
            [[0, 0, 0, 0], [0, 0, 0, 1], [0, 1, 1, 1], [0, 0, 0, 0]],
            [[0, 1, 1, 0], [0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 0, 0]],
        ],
        # J
        [
            [[0, 0, 0, 0], [0, 1, 1, 1], [0, 0, 0, 1], [0, 0, 0, 0]],
            [[0, 0, 1, 1], [0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 0, 0]],
            [[0, 1, 0, 0], [0, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]],
            [[0, 0, 1, 0], [0, 0, 1, 0], [0, 1, 1, 0], [0, 0, 0, 0]],
        ],
        # O
        [
            [[0, 0, 0, 0], [0, 1, 1, 0], [0, 1, 1, 0], [0, 0, 0, 0]],
            [[0, 0, 0, 0], [0, 1, 1, 0], [0, 1, 1, 0], [0, 0, 0, 0]],
            [[0, 0, 0, 0], [0, 1, 1, 0], [0, 1, 1, 0], [0, 0, 0, 0]],
            [[0, 0, 0, 0], [0, 1, 1, 0], [0, 1, 1, 0], [0, 0, 0, 0]],
        ],
        # S
        [
            [[0, 0, 0, 0], [0, 0, 1, 1], [0, 1, 1, 0], [0, 0, 0, 0]],
            [[0, 0, 1, 0], [0, 0, 1, 1], [0, 0, 0, 1], [0, 0, 0, 0]],
            [[0, 0, 0, 0], [0, 0, 1, 1], [0, 1, 1, 0], [0, 0, 0, 0]],
            [[0, 1, 0, 0], [0, 1, 1, 0], [0, 0, 1, 0], [0, 0, 0, 0]],
        ],
        # T
        [
            [[0, 0, 0, 0], [0, 1, 1, 1], [0, 0, 1, 0], [0, 0, 0, 0]],
            [[0, 0, 1, 0], [0, 0, 1, 1], [0, 0, 1, 0], [0, 0, 0, 0]],
            [[0, 0, 1, 0], [0, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]],
            [[0, 0, 1, 0], [0, 1, 1, 0], [0, 0, 1, 0], [0, 0, 0, 0]],
        ],
        # Z
        [
            [[0, 0, 0, 0], [0, 1, 1, 0], [0, 0, 1, 1], [0, 0, 0, 0]],
            [[0, 0, 0, 1], [0, 0, 1, 1], [0, 0, 1, 0], [0, 0, 0, 0]],
            [[0, 0, 0, 0], [0, 1, 1, 0], [0, 0, 1, 1], [0, 0, 0, 0]],
            [[0, 1, 0, 0], [0, 1, 1, 0], [0, 0, 1, 0], [0, 0, 0, 0]],
        ],
    ],
    dtype=np.uint8,
)
SHAPES.flags.writeable = False


def _build_offsets() -> Dict[TetrominoType, Tuple[Offsets, ...]]:
    """Pre-compute the occupied ``(row, col)`` offsets of every matrix."""

    offsets: Dict[TetrominoType, Tuple[Offsets, ...]] = {}
    for kind, index in _KIND_INDEX.items():
        offsets[kind] = tuple(
            [(int(r), int(c)) for r, c in np.argwhere(SHAPES[index, rotation])]
            for rotation in range(ROTATIONS)
        )
    return offsets


_OFFSETS = _build_offsets()


def shape_matrix(kind: TetrominoType, rotation: int) -> NDArray[np.uint8]:
    """Return the read-only 4x4 occupancy matrix for ``kind`` at ``rotation``.

    Parameters
    ----------
    kind:
        The :class:`TetrominoType` to query.
    rotation:
        Index of the desired rotation state.  Values are wrapped so any integer
        is accepted.
    """

    return SHAPES[_KIND_INDEX[kind], rotation % ROTATIONS]


def shape_blocks(kind: TetrominoType, rotation: int) -> Offsets:
    """Return the occupied ``(row, col)`` offsets of ``kind`` at ``rotation``."""

    return list(_OFFSETS[kind][rotation % ROTATIONS])


@dataclass(frozen=True)
class Tetromino:
    """Active falling piece.

    ``x`` and ``y`` locate the top-left corner of the 4x4 frame in board
    columns and rows.  Either may be negative, or put part of the frame past
    the board edge, as long as no occupied cell lands somewhere illegal.
    Instances are immutable; movement produces a new candidate piece.
    """

    kind: TetrominoType
    rotation: int = 0
    x: int = 0
    y: int = 0

    def moved(self, dx: int, dy: int) -> "Tetromino":
        """Return a copy translated by ``dx`` columns and ``dy`` rows."""

        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "Tetromino":
        """Return a copy turned one step clockwise, position unchanged."""

        return replace(self, rotation=(self.rotation + 1) % ROTATIONS)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the global ``(row, col)`` coordinates of the occupied cells."""

        return [(self.y + dr, self.x + dc) for dr, dc in shape_blocks(self.kind, self.rotation)]
