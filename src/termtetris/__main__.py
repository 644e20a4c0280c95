"""Command line entry point.

Run with: `python -m termtetris`

Without options this prints a single frame (the board plus the active piece
after ``--frames`` gravity ticks), useful as a smoke test.  ``--play`` starts
the raw-mode terminal game and ``--pygame`` opens a window instead.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .game_state import GameState
from .utils import TICK_MS, grid_to_text


LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="termtetris", description=__doc__)
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--play", action="store_true", help="Play in this terminal.")
    mode.add_argument("--pygame", action="store_true", help="Play in a pygame window.")
    parser.add_argument(
        "--tick-ms",
        type=int,
        default=TICK_MS,
        help="Milliseconds between gravity ticks.",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=0,
        help="Ticks to run before printing the single frame (ignored when playing).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write log records to this file instead of stderr.",
    )
    args = parser.parse_args(argv)
    if args.tick_ms < 0:
        parser.error("--tick-ms must be non-negative")
    if args.frames < 0:
        parser.error("--frames must be non-negative")
    return args


def render_frame(frames: int = 0) -> str:
    """Return the text frame of a new game after ``frames`` ticks."""

    gs = GameState()
    for _ in range(frames):
        gs.tick()
    return grid_to_text(gs.render_grid())


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    if args.play and args.log_file is None:
        # Log lines on stderr would tear through the raw-mode screen.
        level = max(level, logging.WARNING)
    logging.basicConfig(level=level, filename=args.log_file, format="%(asctime)s %(name)s %(message)s")

    if args.play:
        from .run_terminal import main as play_terminal

        play_terminal(tick_ms=args.tick_ms)
    elif args.pygame:
        from .run_pygame import main as play_pygame

        play_pygame(tick_ms=args.tick_ms)
    else:
        LOGGER.debug("Rendering a single frame after %d tick(s)", args.frames)
        print(render_frame(args.frames), end="")


if __name__ == "__main__":
    main()
