"""Simple pygame front-end for the engine.

This module provides a windowed version of the game on top of
:class:`~termtetris.game_state.GameState`.  It is intentionally lightweight:
arrow keys become :class:`Direction` intents and a timer calls
:meth:`GameState.tick` every ``tick_ms`` milliseconds.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import pygame

from .board import Board, Cell, Grid
from .game_state import Direction, GameState
from .utils import TICK_MS


LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60

CELL_COLORS = {
    Cell.EMPTY: (0, 0, 0),
    Cell.OCCUPIED: (255, 165, 0),
}
GRID_LINE_COLOR = (50, 50, 50)

KEY_MAP: Dict[int, Direction] = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_UP: Direction.ROTATE_CW,
}
PAUSE_KEY = pygame.K_p
STOP_KEY = pygame.K_ESCAPE


def key_to_direction(key: int) -> Optional[Direction]:
    return KEY_MAP.get(key)


def draw_grid(screen: pygame.Surface, grid: Grid) -> None:
    """Render a grid snapshot, one filled square per cell."""

    for r in range(grid.shape[0]):
        for c in range(grid.shape[1]):
            color = CELL_COLORS[Cell(int(grid[r, c]))]
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE_COLOR, rect, 1)


class GameRunner:
    """Manage the game loop with pause/resume/stop controls.

    ``P`` toggles pause and ``Escape`` stops the game; the arrow keys are
    intents for the active piece.
    """

    def __init__(self, *, tick_ms: int = TICK_MS) -> None:
        self.tick_ms = tick_ms
        self._running = False
        self._paused = False
        self._screen: pygame.Surface | None = None
        self._state: GameState | None = None
        self._clock: pygame.time.Clock | None = None
        self._drop_timer = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def state(self) -> GameState | None:
        return self._state

    def handle_key(self, key: int) -> None:
        """Apply the control or intent bound to ``key``; other keys are ignored."""

        if key == PAUSE_KEY:
            if self._paused:
                self.resume()
            else:
                self.pause()
            return
        if key == STOP_KEY:
            self.stop()
            return

        direction = key_to_direction(key)
        if direction is not None and self._state is not None and not self._paused:
            self._state.apply_intent(direction)

    def advance(self, dt: int) -> bool:
        """Accumulate ``dt`` milliseconds and tick once the period elapses.

        Returns ``True`` if a tick happened.
        """

        if self._paused or self._state is None:
            return False
        self._drop_timer += dt
        if self._drop_timer < self.tick_ms:
            return False
        self._drop_timer = 0
        if self._state.tick():
            LOGGER.debug("Piece locked; %d piece(s) so far", self._state.pieces)
        return True

    async def _run_loop(self) -> None:
        pygame.init()
        try:
            self._screen = pygame.display.set_mode((Board.width * CELL_SIZE, Board.height * CELL_SIZE))
            pygame.display.set_caption("Tetris")
            self._clock = pygame.time.Clock()

            self._state = GameState()
            LOGGER.info("Game started")

            self._drop_timer = 0
            self._running = True
            while self._running:
                dt = self._clock.tick(FPS) if self._clock else 0
                # Even when paused, process events so the window remains responsive
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self.handle_key(event.key)

                self.advance(dt)

                if self._screen and self._state:
                    self._screen.fill(CELL_COLORS[Cell.EMPTY])
                    draw_grid(self._screen, self._state.render_grid())
                    pygame.display.set_caption(f"Tetris{' - Paused' if self._paused else ''}")
                    pygame.display.flip()

                # Yield to the event loop between frames
                await asyncio.sleep(0)
        finally:
            self._running = False
            pygame.quit()
            LOGGER.info("Game stopped")

    def start(self) -> None:
        """Run the game until the window is closed or the game is stopped."""

        if self._running:
            LOGGER.info("Game already running")
            return
        self._paused = False
        asyncio.run(self._run_loop())

    def pause(self) -> None:
        if not self._running:
            LOGGER.info("Pause ignored: game not running")
            return
        self._paused = True
        LOGGER.info("Paused")

    def resume(self) -> None:
        if not self._running:
            LOGGER.info("Resume ignored: game not running")
            return
        self._paused = False
        LOGGER.info("Resumed")

    def stop(self) -> None:
        if not self._running:
            LOGGER.info("Stop ignored: game not running")
            return
        # The loop notices the flag on its next iteration
        self._running = False


def main(tick_ms: int = TICK_MS) -> None:
    """Open a window and play until it is closed."""

    GameRunner(tick_ms=tick_ms).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
