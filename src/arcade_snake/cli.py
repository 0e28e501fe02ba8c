"""Command-line entry point for Arcade Snake."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from arcade_snake.difficulty import DEFAULT_LEVELS, DifficultyTable
from arcade_snake.grid import CellType

logger = logging.getLogger(__name__)

_GLYPHS: dict[int, str] = {
    CellType.EMPTY: ".",
    CellType.SNAKE: "o",
    CellType.HEAD: "@",
    CellType.FOOD: "*",
    CellType.OBSTACLE: "#",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arcade-snake",
        description="Arcade Snake headless tools.",
    )
    parser.add_argument(
        "--levels", type=str, default=None,
        help="Path to a JSON difficulty table (defaults to built-in levels).",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- levels ---
    levels_p = sub.add_parser("levels", help="Print the difficulty table.")
    levels_p.add_argument(
        "--save", type=str, default=None,
        help="Also write the table to this JSON path.",
    )

    # --- obstacles ---
    obst_p = sub.add_parser("obstacles", help="Draw the board for a level.")
    obst_p.add_argument("--difficulty", type=int, default=1)

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play a scripted game headless and print the result.",
    )
    sim_p.add_argument(
        "--moves", type=str, default="",
        help="Comma-separated directions, one per tick; '-' means no input.",
    )
    sim_p.add_argument("--difficulty", type=int, default=1)
    sim_p.add_argument("--seed", type=int, default=None)

    return parser


def _load_levels(args: argparse.Namespace) -> DifficultyTable:
    if args.levels:
        return DifficultyTable.load(args.levels)
    return DEFAULT_LEVELS


def render_board(cells) -> str:
    """Draw a painted grid array as text, one row per line."""
    return "\n".join(
        "".join(_GLYPHS[int(v)] for v in row) for row in cells
    )


def _run_levels(args: argparse.Namespace) -> int:
    levels = _load_levels(args)
    for lvl in levels.values():
        print(  # noqa: T201
            f"{lvl.level}: {lvl.name} ({lvl.subtitle}) "
            f"{lvl.interval_ms}ms, accelerated {lvl.accelerated_interval_ms}ms"
        )
    if args.save:
        levels.save(args.save)
    return 0


def _run_obstacles(args: argparse.Namespace) -> int:
    from arcade_snake.engine import GameEngine

    levels = _load_levels(args)
    if args.difficulty not in levels:
        logger.error("Unknown difficulty level %d.", args.difficulty)
        return 2
    engine = GameEngine(difficulty=args.difficulty, levels=levels, seed=0)
    snap = engine.snapshot()
    cells = engine.grid.paint(snap.snake, snap.food, snap.obstacles)
    print(render_board(cells))  # noqa: T201
    return 0


def _run_simulate(args: argparse.Namespace) -> int:
    from arcade_snake.engine import GameEngine, GamePhase

    levels = _load_levels(args)
    if args.difficulty not in levels:
        logger.error("Unknown difficulty level %d.", args.difficulty)
        return 2
    engine = GameEngine(difficulty=args.difficulty, levels=levels, seed=args.seed)
    engine.start()

    moves = [m.strip() for m in args.moves.split(",") if m.strip()]
    for move in moves:
        if engine.phase is GamePhase.OVER:
            break
        if move != "-":
            engine.request_direction(move)
        engine.step()

    for event in engine.drain_events():
        logger.info(event.announcement())
    state = engine.snapshot().to_dict()
    state.pop("grid")
    print(json.dumps(state, indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``arcade-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "levels": _run_levels,
        "obstacles": _run_obstacles,
        "simulate": _run_simulate,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
