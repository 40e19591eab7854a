"""Rectangular grid of tiles and its flat integer / level text codecs."""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Iterable

import numpy as np

from cat_maze.tile import Tile

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\s,]+")


class FieldFormatError(ValueError):
    """Raised when a field or its encoded form is malformed."""


class Field:
    """Fixed-size grid of :class:`Tile` objects.

    ``tiles`` is row-major: ``tiles[row][col]``. The encoded form is a flat
    sequence of ``width * height`` tile codes followed by ``width`` and
    ``height``.
    """

    def __init__(self, width: int, height: int, tiles: list[list[Tile]]) -> None:
        if width < 0 or height < 0:
            raise FieldFormatError("Field dimensions must be non-negative.")
        if len(tiles) != height:
            raise FieldFormatError("invalid height")
        if any(len(row) != width for row in tiles):
            raise FieldFormatError("invalid width")
        self.width = width
        self.height = height
        self.tiles = tiles

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.tiles == other.tiles
        )

    def __repr__(self) -> str:
        return f"Field(width={self.width}, height={self.height})"

    def in_bounds(self, row: int, col: int) -> bool:
        """Check whether a coordinate lies within the field."""
        return 0 <= row < self.height and 0 <= col < self.width

    def tile(self, row: int, col: int) -> Tile:
        """Return the tile at a coordinate without negative-index wrapping."""
        if not self.in_bounds(row, col):
            raise IndexError(f"({row}, {col}) is outside the field.")
        return self.tiles[row][col]

    def cat_ids(self) -> list[int]:
        """Return the sorted distinct ids of cats present on the field."""
        return sorted({
            tile.foreground_id
            for row in self.tiles
            for tile in row
            if tile.has_cat()
        })

    def copy(self) -> Field:
        return Field(self.width, self.height, copy.deepcopy(self.tiles))

    def encode(self) -> np.ndarray:
        """Encode as ``width * height`` row-major tile codes plus dimensions."""
        arr = np.zeros(self.width * self.height + 2, dtype=np.uint32)
        arr[-2] = self.width
        arr[-1] = self.height
        for row in range(self.height):
            for col in range(self.width):
                arr[row * self.width + col] = self.tiles[row][col].encode()
        return arr

    @classmethod
    def decode(
        cls, codes: Iterable[int] | np.ndarray, max_size: int | None = None,
    ) -> Field:
        """Build a field from the output of :meth:`encode`.

        With *max_size* set, a width or height above it is rejected before
        any tiles are built.
        """
        if not isinstance(codes, np.ndarray):
            codes = list(codes)
        try:
            arr = np.asarray(codes, dtype=np.int64)
        except (OverflowError, TypeError, ValueError) as exc:
            raise FieldFormatError("invalid field") from exc
        if arr.ndim != 1 or arr.size < 2:
            raise FieldFormatError("invalid field")
        width = int(arr[-2])
        height = int(arr[-1])
        if max_size is not None and (width > max_size or height > max_size):
            raise FieldFormatError(f"field is larger than {max_size}x{max_size}")
        if width < 0 or height < 0 or arr.size != width * height + 2:
            raise FieldFormatError("invalid field")

        tiles = [
            [Tile.decode(int(arr[row * width + col])) for col in range(width)]
            for row in range(height)
        ]
        logger.debug("Decoded %dx%d field.", width, height)
        return cls(width, height, tiles)

    @classmethod
    def parse(cls, text: str, max_size: int | None = None) -> Field:
        """Decode level text: decimal or ``0x`` hex codes split by commas/space."""
        codes: list[int] = []
        for token in _SEPARATORS.split(text.strip()):
            if not token:
                continue
            try:
                if token.lower().startswith("0x"):
                    codes.append(int(token, 16))
                else:
                    codes.append(int(token, 10))
            except ValueError as exc:
                raise FieldFormatError(f"invalid tile code {token!r}") from exc
        return cls.decode(codes, max_size=max_size)

    def to_text(self) -> str:
        """Format as level text accepted by :meth:`parse`."""
        lines = [
            ", ".join(f"0x{tile.encode():06x}" for tile in row)
            for row in self.tiles
        ]
        lines.append(f"{self.width}, {self.height}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Serialize field state to a dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "tiles": [[tile.to_dict() for tile in row] for row in self.tiles],
        }
