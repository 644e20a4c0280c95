"""Falling-block puzzle engine with terminal, pygame and Gymnasium drivers."""

from .board import Board, Cell, HEIGHT, WIDTH
from .tetromino import SHAPES, Tetromino, TetrominoType, shape_blocks, shape_matrix
from .game_state import Direction, GameState
from .utils import TICK_MS, grid_to_text, is_valid_position, render_grid

__all__ = [
    "Board",
    "Cell",
    "Direction",
    "GameState",
    "HEIGHT",
    "SHAPES",
    "TICK_MS",
    "Tetromino",
    "TetrominoType",
    "WIDTH",
    "grid_to_text",
    "is_valid_position",
    "render_grid",
    "shape_blocks",
    "shape_matrix",
]
