"""Run a headless simulation with random player input.

Run with::

    PYTHONPATH=src python examples/simulate.py

Every cycle picks either no input or one random intent, then ticks gravity,
exactly like the interactive drivers.  Pass ``--help`` to see options.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

from termtetris.game_state import Direction, GameState
from termtetris.utils import grid_to_text


LOGGER = logging.getLogger(__name__)

# ``None`` stands for "no key pressed this cycle".
CHOICES: list[Optional[Direction]] = [None, *Direction]


def run_simulation(cycles: int, seed: Optional[int] = None) -> GameState:
    rng = random.Random(seed)
    state = GameState()
    for _ in range(cycles):
        direction = rng.choice(CHOICES)
        if direction is not None:
            state.apply_intent(direction)
        state.tick()
    return state


def log_summary(state: GameState, *, index: int) -> dict[str, int]:
    summary = {
        "pieces": state.pieces,
        "occupied": state.board.occupied_count(),
    }
    LOGGER.info(
        "Simulation %d: pieces=%d, occupied=%d",
        index,
        summary["pieces"],
        summary["occupied"],
    )
    return summary


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--cycles", type=int, default=500, help="Number of cycles per simulation.")
    parser.add_argument("--simulations", type=int, default=1, help="How many simulations to run.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the first simulation.")
    parser.add_argument(
        "--no-board",
        dest="print_board",
        action="store_false",
        help="Skip printing the final board of the last simulation.",
    )
    parser.set_defaults(print_board=True)
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    state: Optional[GameState] = None
    for sim_idx in range(1, args.simulations + 1):
        seed = None if args.seed is None else args.seed + sim_idx - 1
        state = run_simulation(args.cycles, seed=seed)
        log_summary(state, index=sim_idx)

    if args.print_board and state is not None:
        print(grid_to_text(state.render_grid()), end="")


if __name__ == "__main__":
    main()
