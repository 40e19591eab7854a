"""Plain-text rendering of a field for terminals and logs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cat_maze.tile import BackgroundType, ForegroundType, Tile

if TYPE_CHECKING:
    from cat_maze.field import Field
    from cat_maze.game import Game


def _cell_char(tile: Tile) -> str:
    fg = tile.foreground_type
    cat_id = tile.foreground_id
    if fg == ForegroundType.CAT_HEAD:
        return chr(ord("A") + cat_id - 1)
    if fg == ForegroundType.CAT_BODY:
        return chr(ord("a") + cat_id - 1)
    if fg == ForegroundType.CAT_TAIL:
        return f"{cat_id:x}"
    if fg == ForegroundType.WALL:
        return "#"
    if tile.background_type == BackgroundType.EXIT:
        return "O"
    return "."


def render_field(field: Field) -> str:
    """Draw the field one text line per row.

    Walls are ``#``, empty floor ``.`` and empty exits ``O``. A cat with id
    *n* shows its head as the *n*-th uppercase letter, its body as the
    matching lowercase letter and its tail as *n* in hex.
    """
    return "\n".join(
        "".join(_cell_char(tile) for tile in row) for row in field.tiles
    )


def render_game(game: Game) -> str:
    status = "solved" if game.is_won() else "in progress"
    header = f"Moves: {game.move_count} ({status})"
    return f"{header}\n{render_field(game.field)}"
