"""Gymnasium-compatible wrapper around the tick-level engine.

Each step is one driver cycle: an optional intent followed by one gravity
tick.  Action space is ``Discrete(5)``:

  - 0: no intent this cycle
  - 1: left
  - 2: right
  - 3: down
  - 4: rotate clockwise

The observation is the rendered ``(20, 10)`` grid (locked cells plus the
active piece) as ``uint8``.  There is no scoring and no game over, so the
reward is always zero and episodes only end through ``max_steps``
truncation.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, Cell, Grid
from .game_state import Direction, GameState
from .utils import grid_to_text


ACTIONS: Tuple[Optional[Direction], ...] = (
    None,
    Direction.LEFT,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.ROTATE_CW,
)


class TetrisTickEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 5,
    }

    def __init__(self, *, max_steps: Optional[int] = 1000, render_mode: Optional[str] = None) -> None:
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render mode: {render_mode}")
        self.render_mode = render_mode
        self.action_space = spaces.Discrete(len(ACTIONS))
        self.observation_space = spaces.Box(
            low=int(Cell.EMPTY),
            high=int(Cell.OCCUPIED),
            shape=(Board.height, Board.width),
            dtype=np.uint8,
        )
        self._state = GameState()
        self._steps = 0
        self._max_steps = max_steps

    @property
    def state(self) -> GameState:
        return self._state

    # ----------------------- Env API -----------------------
    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._state.reset_game()
        self._steps = 0
        return self._observation(), self._info(locked=False)

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action!r}")
        direction = ACTIONS[int(action)]
        if direction is not None:
            self._state.apply_intent(direction)
        locked = self._state.tick()
        self._steps += 1

        truncated = self._max_steps is not None and self._steps >= self._max_steps
        return self._observation(), 0.0, False, truncated, self._info(locked=locked)

    def render(self) -> Optional[str]:
        if self.render_mode == "ansi":
            return grid_to_text(self._state.render_grid())
        return None

    # ----------------------- Helpers -----------------------
    def _observation(self) -> Grid:
        return self._state.render_grid()

    def _info(self, *, locked: bool) -> Dict[str, Any]:
        return {"locked": locked, "pieces": self._state.pieces, "steps": self._steps}
