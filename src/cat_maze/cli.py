"""Command line front end for playing and inspecting levels."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from cat_maze.config import GameConfig, WinCondition
from cat_maze.field import Field, FieldFormatError
from cat_maze.game import ChainTopologyError, Game
from cat_maze.levels import LEVELS, get_level
from cat_maze.render import render_field, render_game

logger = logging.getLogger(__name__)

Move = tuple[int, int, int, int]


def _parse_move(text: str) -> Move:
    """Parse ``row,col:row,col`` into a move tuple."""
    try:
        src, dst = text.split(":")
        from_row, from_col = (int(v) for v in src.split(","))
        to_row, to_col = (int(v) for v in dst.split(","))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"invalid move {text!r}, expected ROW,COL:ROW,COL",
        ) from exc
    return from_row, from_col, to_row, to_col


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cat-maze",
        description="Drag cats through a maze to the exit.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    sub.add_parser("levels", help="List the built-in levels.")

    show_p = sub.add_parser("show", help="Print a level.")
    show_p.add_argument("level", nargs="?", default=None)
    show_p.add_argument(
        "--file", type=str, default=None,
        help="Read level text from a file instead of a built-in level.",
    )

    play_p = sub.add_parser("play", help="Apply moves to a level.")
    play_p.add_argument("level", nargs="?", default=None)
    play_p.add_argument("--file", type=str, default=None)
    play_p.add_argument(
        "--moves", type=_parse_move, nargs="+", default=[],
        metavar="ROW,COL:ROW,COL",
        help="Drag steps applied in order.",
    )
    play_p.add_argument(
        "--win-condition", type=str, default=None,
        choices=[w.value for w in WinCondition],
    )
    play_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON game config.",
    )

    return parser


def _load_field(args: argparse.Namespace) -> tuple[Field, WinCondition | None]:
    if args.file:
        return Field.parse(Path(args.file).read_text()), None
    if args.level is None:
        raise KeyError("Give a level name or --file.")
    level = get_level(args.level)
    return level.field(), level.win_condition


def _run_levels(args: argparse.Namespace) -> int:
    for level in LEVELS.values():
        field = level.field()
        print(  # noqa: T201
            f"{level.name:<12} {field.width}x{field.height}  {level.title}",
        )
    return 0


def _run_show(args: argparse.Namespace) -> int:
    field, _ = _load_field(args)
    print(render_field(field))  # noqa: T201
    return 0


def _run_play(args: argparse.Namespace) -> int:
    field, level_condition = _load_field(args)

    if args.config:
        config = GameConfig.load(args.config)
    elif level_condition is not None:
        config = GameConfig(win_condition=level_condition)
    else:
        config = GameConfig()
    if args.win_condition is not None:
        config = GameConfig(
            win_condition=WinCondition(args.win_condition),
            target_cat_id=config.target_cat_id,
        )

    game = Game(field, config)
    game.check_chains()
    for move in args.moves:
        before = game.move_count
        game.move_cat(*move)
        if game.move_count == before:
            logger.info("Move %s was rejected.", move)

    print(render_game(game))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``cat-maze`` CLI."""
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
        "show": _run_show,
        "play": _run_play,
    }
    try:
        return handlers[args.command](args)
    except (FieldFormatError, ChainTopologyError, KeyError) as exc:
        logger.error("Cannot load level: %s", exc)
        return 2
    except (OSError, TypeError, ValueError) as exc:
        # Unreadable level or config file, or a config that is not valid JSON.
        logger.error("Cannot read input: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
