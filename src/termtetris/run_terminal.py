"""Raw-mode terminal front-end for the engine.

The loop mirrors the classic arcade cabinet: poll at most one key without
blocking, apply it, redraw, let gravity pull the piece one row and then sleep
until the next period.  The terminal is switched to raw mode for the whole
session and always switched back, whatever way the loop ends.
"""

from __future__ import annotations

import logging
import os
import select
import sys
import termios
import time
import tty
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional, TextIO

from .game_state import Direction, GameState
from .utils import TICK_MS, grid_to_text


LOGGER = logging.getLogger(__name__)

CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"
HEADER = "--- Rusty TETRIS ---"
GOODBYE = "Raw mode disabled. Goodbye!"
# Raw mode disables the usual line discipline, so rows end in CR LF.
LINE_END = "\r\n"

# Arrow keys arrive as ANSI escape sequences.
KEY_MAP: Dict[bytes, Direction] = {
    b"\x1b[A": Direction.ROTATE_CW,
    b"\x1b[B": Direction.DOWN,
    b"\x1b[C": Direction.RIGHT,
    b"\x1b[D": Direction.LEFT,
}
QUIT_KEYS = (b"q", b"Q", b"\x03")

KeySource = Callable[[], Optional[bytes]]


def decode_key(key: bytes) -> Optional[Direction]:
    """Map a single key to a :class:`Direction`.

    Anything that is not an arrow key decodes to ``None``.
    """

    return KEY_MAP.get(bytes(key))


def is_quit_key(key: bytes) -> bool:
    return bytes(key) in QUIT_KEYS


def take_key(pending: bytearray) -> Optional[bytes]:
    """Remove and return the first complete key in ``pending``.

    A key is either a whole ``ESC [ X`` sequence or a single byte.  A
    sequence that has not fully arrived yet stays in the buffer and
    ``None`` is returned; so does an empty buffer.
    """

    if not pending:
        return None
    if pending[0] == 0x1B:
        if len(pending) == 1 or (len(pending) == 2 and pending[1] == ord("[")):
            return None
        size = 3 if pending[1] == ord("[") else 1
    else:
        size = 1
    key = bytes(pending[:size])
    del pending[:size]
    return key


@contextmanager
def raw_mode(fd: int, out: Optional[TextIO] = None) -> Iterator[None]:
    """Put the terminal behind ``fd`` in raw mode for the enclosed block."""

    out = out if out is not None else sys.stdout

    saved = termios.tcgetattr(fd)
    tty.setraw(fd)
    LOGGER.debug("Raw mode enabled on fd %d", fd)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        out.write(f"\n{GOODBYE}\n")
        out.flush()


def poll_key(fd: int) -> Optional[bytes]:
    """Return pending input on ``fd`` without waiting, or ``None``."""

    ready, _, _ = select.select([fd], [], [], 0)
    if not ready:
        return None
    return os.read(fd, 64)


class TerminalRunner:
    """Drive a :class:`GameState` and draw it as text.

    ``read_key``, ``out`` and ``sleep`` default to no input, ``sys.stdout``
    and :func:`time.sleep` so the runner can be exercised without a terminal.
    """

    def __init__(
        self,
        *,
        tick_ms: int = TICK_MS,
        read_key: Optional[KeySource] = None,
        out: Optional[TextIO] = None,
        sleep: Callable[[float], None] = time.sleep,
        state: Optional[GameState] = None,
    ) -> None:
        if tick_ms < 0:
            raise ValueError(f"tick_ms must be non-negative, got {tick_ms}")
        self.tick_ms = tick_ms
        self.state = state if state is not None else GameState()
        self.frames = 0
        self.running = False
        self._read_key: KeySource = read_key or (lambda: None)
        self._pending = bytearray()
        self._out = out if out is not None else sys.stdout
        self._sleep = sleep

    def frame_text(self) -> str:
        grid = self.state.render_grid()
        return CLEAR_SCREEN + HEADER + LINE_END + grid_to_text(grid, line_end=LINE_END)

    def draw(self) -> None:
        self._out.write(self.frame_text())
        self._out.flush()

    def step(self) -> bool:
        """Run one cycle.  Returns ``False`` when a quit key was read.

        At most one key is consumed per cycle; the rest wait in the buffer.
        """

        data = self._read_key()
        if data:
            self._pending.extend(data)
        key = take_key(self._pending)
        if key is not None:
            if is_quit_key(key):
                return False
            direction = decode_key(key)
            if direction is not None:
                self.state.apply_intent(direction)

        self.draw()
        self.state.tick()
        self.frames += 1
        return True

    def run(self, max_frames: Optional[int] = None) -> int:
        """Loop until a quit key or ``max_frames`` cycles; return frames run."""

        LOGGER.info("Terminal game started (tick=%dms)", self.tick_ms)
        self.running = True
        while self.running and (max_frames is None or self.frames < max_frames):
            if not self.step():
                break
            self._sleep(self.tick_ms / 1000.0)
        self.running = False
        LOGGER.info("Terminal game stopped after %d frame(s)", self.frames)
        return self.frames


def main(tick_ms: int = TICK_MS, max_frames: Optional[int] = None) -> None:
    """Play in the controlling terminal."""

    fd = sys.stdin.fileno()
    with raw_mode(fd):
        runner = TerminalRunner(tick_ms=tick_ms, read_key=lambda: poll_key(fd))
        runner.run(max_frames)


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
