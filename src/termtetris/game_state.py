"""High level game state container and the rules that drive it.

:class:`GameState` owns the locked board and the optional active piece.
Drivers feed it at most one :class:`Direction` per cycle followed by one
:meth:`GameState.tick`.  Illegal moves are filtered out silently: the piece
simply stays where it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from .board import Board, Grid
from .tetromino import Tetromino, TetrominoType
from .utils import is_valid_position, render_grid


LOGGER = logging.getLogger(__name__)

# Every spawned piece starts from the same place with the same kind.
SPAWN_KIND = TetrominoType.L
SPAWN_X = 3
SPAWN_Y = 0


class Direction(Enum):
    """Decoded player intent."""

    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"
    ROTATE_CW = "rotate_cw"


_TRANSLATIONS: Dict[Direction, tuple[int, int]] = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
}


@dataclass
class GameState:
    """Mutable state for a game session.

    A freshly constructed state already has an active piece.  ``active`` is
    only ``None`` inside :meth:`tick`, between locking one piece and spawning
    the next, or when a caller clears it explicitly.
    """

    board: Board = field(default_factory=Board)
    active: Optional[Tetromino] = None
    pieces: int = 0

    def __post_init__(self) -> None:
        if self.active is None:
            self.spawn()

    def spawn(self) -> Tetromino:
        """Make a new piece active at the spawn point and return it.

        The spawn point is not validated.  If locked cells already cover it
        the new piece overlaps them until the next tick locks it in place.
        """

        self.active = Tetromino(SPAWN_KIND, rotation=0, x=SPAWN_X, y=SPAWN_Y)
        LOGGER.debug("Spawned %s", self.active)
        return self.active

    def is_valid_position(self, candidate: Tetromino) -> bool:
        return is_valid_position(self.board, candidate)

    def apply_intent(self, direction: Direction) -> bool:
        """Try to move or rotate the active piece.

        Returns ``True`` when the move was committed.  A move that would leave
        the board or overlap locked cells leaves the piece untouched; this is
        not an error.

        Raises:
            ValueError: If ``direction`` is not a :class:`Direction`.
        """

        if not isinstance(direction, Direction):
            raise ValueError(f"Unknown direction: {direction!r}")
        if self.active is None:
            return False

        if direction is Direction.ROTATE_CW:
            candidate = self.active.rotated()
        else:
            dx, dy = _TRANSLATIONS[direction]
            candidate = self.active.moved(dx, dy)

        if not self.is_valid_position(candidate):
            return False
        self.active = candidate
        return True

    def tick(self) -> bool:
        """Advance gravity by one row.

        When the piece cannot descend it is locked and the next piece is
        spawned before returning.  Returns ``True`` if a piece was locked.
        """

        if self.active is None:
            return False

        candidate = self.active.moved(0, 1)
        if self.is_valid_position(candidate):
            self.active = candidate
            return False

        self.lock(self.active)
        self.spawn()
        return True

    def lock(self, piece: Tetromino) -> None:
        """Transfer ``piece`` into the board and clear the active slot."""

        landed = self.board.lock_piece(piece)
        self.active = None
        self.pieces += 1
        LOGGER.debug("Locked %s (%d cell(s) on board)", piece, landed)

    def render_grid(self) -> Grid:
        """Return the board with the active piece drawn on a copy."""

        return render_grid(self.board, self.active)

    def reset_game(self) -> None:
        """Reset the entire game state for a new game."""

        self.board = Board()
        self.pieces = 0
        self.active = None
        self.spawn()
