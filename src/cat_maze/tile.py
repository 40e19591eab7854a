"""Tile representation and its packed 24-bit integer codec."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass

NIBBLE_MASK = 0xF

# Field name -> bit offset inside the packed tile code.
_LAYOUT: tuple[tuple[str, int], ...] = (
    ("background_type", 0),
    ("background_id", 4),
    ("foreground_type", 8),
    ("foreground_id", 12),
    ("head_direction", 16),
    ("tail_direction", 20),
)


class Direction(enum.IntEnum):
    """Compass direction from a chain segment to its neighbour."""

    RIGHT = 0
    DOWN = 1
    LEFT = 2
    UP = 3

    @property
    def delta(self) -> tuple[int, int]:
        """Return the (row_delta, col_delta) of one step this way."""
        return _DELTAS[self]

    @classmethod
    def from_offset(cls, row_delta: int, col_delta: int) -> Direction | None:
        """Map a unit offset to a direction, or ``None`` if not adjacent."""
        return _OFFSETS.get((row_delta, col_delta))


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.UP: (-1, 0),
}

_OFFSETS: dict[tuple[int, int], Direction] = {v: k for k, v in _DELTAS.items()}


class BackgroundType(enum.IntEnum):
    """Static terrain under a tile."""

    FLOOR = 0
    EXIT = 1


class ForegroundType(enum.IntEnum):
    """Dynamic occupant of a tile."""

    EMPTY = 0
    WALL = 1
    CAT_HEAD = 2
    CAT_BODY = 3
    CAT_TAIL = 4


CAT_TYPES = frozenset(
    {ForegroundType.CAT_HEAD, ForegroundType.CAT_BODY, ForegroundType.CAT_TAIL},
)
ENDPOINT_TYPES = frozenset({ForegroundType.CAT_HEAD, ForegroundType.CAT_TAIL})


@dataclass
class Tile:
    """One grid cell.

    All six fields hold raw enum codes so that every nibble value survives a
    round trip, including codes that no enum member names.

    ``head_direction`` leads to the neighbour on the way to the cat's head and
    ``tail_direction`` to the neighbour on the way to its tail.
    """

    background_type: int = BackgroundType.FLOOR
    background_id: int = 0
    foreground_type: int = ForegroundType.EMPTY
    foreground_id: int = 0
    head_direction: int = Direction.RIGHT
    tail_direction: int = Direction.RIGHT

    def encode(self) -> int:
        """Pack the tile into a 24-bit integer, one nibble per field."""
        code = 0
        for name, offset in _LAYOUT:
            value = int(getattr(self, name))
            if not 0 <= value <= NIBBLE_MASK:
                raise ValueError(
                    f"Tile field {name}={value} does not fit in 4 bits.",
                )
            code |= value << offset
        return code

    @classmethod
    def decode(cls, code: int) -> Tile:
        """Unpack a tile code produced by :meth:`encode`."""
        code = int(code)
        return cls(**{
            name: (code >> offset) & NIBBLE_MASK for name, offset in _LAYOUT
        })

    def has_cat(self) -> bool:
        return self.foreground_type in CAT_TYPES

    def is_endpoint(self) -> bool:
        return self.foreground_type in ENDPOINT_TYPES

    def pointer(self, end: ForegroundType) -> int:
        """Return the direction field leading toward chain end *end*."""
        if end == ForegroundType.CAT_HEAD:
            return self.head_direction
        if end == ForegroundType.CAT_TAIL:
            return self.tail_direction
        raise ValueError(f"{end!r} is not a chain end.")

    def set_pointer(self, end: ForegroundType, direction: Direction) -> None:
        """Point the direction field for chain end *end* at *direction*."""
        if end == ForegroundType.CAT_HEAD:
            self.head_direction = direction
        elif end == ForegroundType.CAT_TAIL:
            self.tail_direction = direction
        else:
            raise ValueError(f"{end!r} is not a chain end.")

    def to_dict(self) -> dict:
        """Serialize the tile as plain integers."""
        return {name: int(value) for name, value in asdict(self).items()}
