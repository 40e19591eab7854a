"""Cat movement engine and win check."""

from __future__ import annotations

import logging
from typing import NamedTuple

from cat_maze.config import GameConfig, WinCondition
from cat_maze.field import Field
from cat_maze.tile import BackgroundType, Direction, ForegroundType, Tile

logger = logging.getLogger(__name__)

_OPPOSITE_END: dict[ForegroundType, ForegroundType] = {
    ForegroundType.CAT_HEAD: ForegroundType.CAT_TAIL,
    ForegroundType.CAT_TAIL: ForegroundType.CAT_HEAD,
}


class ChainTopologyError(RuntimeError):
    """Raised when a cat's direction pointers do not form a valid chain."""


class _Orientation(NamedTuple):
    """Chain ends as seen from the endpoint being dragged."""

    front: ForegroundType
    back: ForegroundType


class Game:
    """A single puzzle session.

    The game owns its field. Each accepted :meth:`move_cat` call mutates the
    field in place and bumps :attr:`move_count`; rejected moves change
    nothing.
    """

    def __init__(self, field: Field, config: GameConfig | None = None) -> None:
        self.field = field
        self.config = config if config is not None else GameConfig()
        self._move_count = 0

    @property
    def move_count(self) -> int:
        return self._move_count

    def is_won(self) -> bool:
        """Check the field against the configured win condition."""
        target = self.config.target_cat_id

        def on_exit(tile: Tile) -> bool:
            return (
                tile.foreground_id == target
                and tile.background_type == BackgroundType.EXIT
            )

        tiles = [tile for row in self.field.tiles for tile in row]
        if self.config.win_condition == WinCondition.ANY_ON_EXIT:
            return any(tile.has_cat() and on_exit(tile) for tile in tiles)
        return all(not tile.has_cat() or on_exit(tile) for tile in tiles)

    def move_cat(
        self, from_row: int, from_col: int, to_row: int, to_col: int,
    ) -> None:
        """Drag the cat endpoint at (from_row, from_col) one cell over.

        Illegal moves are ignored silently.
        """
        field = self.field
        if not (field.in_bounds(from_row, from_col)
                and field.in_bounds(to_row, to_col)):
            logger.debug("Rejected move outside the field.")
            return

        source = field.tile(from_row, from_col)
        target = field.tile(to_row, to_col)

        if not source.is_endpoint():
            logger.debug("Rejected move: (%d, %d) is not a cat endpoint.",
                         from_row, from_col)
            return

        step = Direction.from_offset(to_row - from_row, to_col - from_col)
        if step is None:
            logger.debug("Rejected move: cells are not adjacent.")
            return

        front = ForegroundType(source.foreground_type)
        orientation = _Orientation(front=front, back=_OPPOSITE_END[front])

        if not self._is_legal(source, target, step, orientation):
            logger.debug("Rejected move into (%d, %d).", to_row, to_col)
            return

        chain = self._trace_chain(from_row, from_col, orientation.back)
        self._propagate([(to_row, to_col), *chain], orientation)

        self._move_count += 1
        if self.is_won():
            logger.info("Puzzle solved in %d moves.", self._move_count)

    def check_chains(self) -> None:
        """Verify that every cat tile lies on a head-to-tail chain.

        Raises :class:`ChainTopologyError` for the first broken cat found.
        """
        linked: set[tuple[int, int]] = set()
        head_ids: set[int] = set()
        for row, tiles in enumerate(self.field.tiles):
            for col, tile in enumerate(tiles):
                if tile.foreground_type == ForegroundType.CAT_HEAD:
                    if tile.foreground_id in head_ids:
                        raise ChainTopologyError(
                            f"Cat {tile.foreground_id} has more than one head.",
                        )
                    head_ids.add(tile.foreground_id)
                    linked.update(
                        self._trace_chain(row, col, ForegroundType.CAT_TAIL),
                    )

        for row, tiles in enumerate(self.field.tiles):
            for col, tile in enumerate(tiles):
                if tile.has_cat() and (row, col) not in linked:
                    raise ChainTopologyError(
                        f"Cat {tile.foreground_id} segment at ({row}, {col}) "
                        "is not linked to a head.",
                    )

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "move_count": self._move_count,
            "won": self.is_won(),
            "win_condition": self.config.win_condition.value,
            "field": self.field.to_dict(),
        }

    @staticmethod
    def _is_legal(
        source: Tile, target: Tile, step: Direction, orientation: _Orientation,
    ) -> bool:
        if target.foreground_type == ForegroundType.EMPTY:
            return True
        if (
            target.foreground_id == source.foreground_id
            and target.foreground_type == orientation.back
        ):
            # Stepping onto the neighbour the endpoint is attached to would
            # fold a two-cell cat back onto itself.
            return source.pointer(orientation.back) != step
        return False

    def _trace_chain(
        self, row: int, col: int, back: ForegroundType,
    ) -> list[tuple[int, int]]:
        """Follow back pointers from an endpoint to the opposite endpoint.

        Returns the chain's coordinates starting at (row, col).
        """
        field = self.field
        cat_id = field.tile(row, col).foreground_id
        chain = [(row, col)]
        limit = field.width * field.height

        while True:
            tile = field.tile(row, col)
            try:
                dr, dc = Direction(tile.pointer(back)).delta
            except ValueError as exc:
                raise ChainTopologyError(
                    f"Cat {cat_id} has an invalid direction at ({row}, {col}).",
                ) from exc
            row, col = row + dr, col + dc

            if not field.in_bounds(row, col):
                raise ChainTopologyError(
                    f"Cat {cat_id} points outside the field at ({row}, {col}).",
                )
            nxt = field.tile(row, col)
            if nxt.foreground_id != cat_id or nxt.foreground_type not in (
                ForegroundType.CAT_BODY, back,
            ):
                raise ChainTopologyError(
                    f"Cat {cat_id} is broken at ({row}, {col}).",
                )

            chain.append((row, col))
            if len(chain) > limit:
                raise ChainTopologyError(f"Cat {cat_id} does not terminate.")
            if nxt.foreground_type == back:
                return chain

    def _propagate(
        self, path: list[tuple[int, int]], orientation: _Orientation,
    ) -> None:
        """Shift the chain one link along *path* (destination first)."""
        front, back = orientation
        tiles = self.field.tiles

        for i in range(len(path) - 1):
            last_row, last_col = path[i - 1] if i > 0 else path[0]
            to_row, to_col = path[i]
            from_row, from_col = path[i + 1]
            to_tile = tiles[to_row][to_col]
            from_tile = tiles[from_row][from_col]

            if i > 0 and from_tile.foreground_type == front:
                # The chain closed onto its own far end: that cell already
                # holds the advanced endpoint, so only relabel this one.
                to_tile.foreground_id = from_tile.foreground_id
                to_tile.foreground_type = back
            else:
                to_tile.foreground_id = from_tile.foreground_id
                to_tile.foreground_type = from_tile.foreground_type
                from_tile.foreground_id = 0
                from_tile.foreground_type = ForegroundType.EMPTY

            forward = Direction.from_offset(last_row - to_row, last_col - to_col)
            if forward is not None:
                to_tile.set_pointer(front, forward)
            backward = Direction.from_offset(from_row - to_row, from_col - to_col)
            if backward is not None:
                to_tile.set_pointer(back, backward)

            if to_tile.foreground_type == back:
                break
