"""Built-in level catalog.

Tile codes are written as ``0xTHIFBb`` nibbles, lowest first: background
type ``b``, background id ``B``, foreground type ``F``, foreground id ``I``,
head direction ``H`` and tail direction ``T``. So ``0x000100`` is a wall,
``0x000001`` an empty exit and ``0x311200`` the head of cat 1 whose tail
link points up.
"""

from __future__ import annotations

from dataclasses import dataclass

from cat_maze.config import GameConfig, WinCondition
from cat_maze.field import Field
from cat_maze.game import Game


@dataclass(frozen=True)
class Level:
    """A named, encoded starting position."""

    name: str
    title: str
    codes: tuple[int, ...]
    win_condition: WinCondition = WinCondition.ANY_ON_EXIT

    def field(self) -> Field:
        """Decode a fresh copy of the starting field."""
        return Field.decode(self.codes)

    def new_game(self, config: GameConfig | None = None) -> Game:
        """Start a game on this level, using its own win condition by default."""
        if config is None:
            config = GameConfig(win_condition=self.win_condition)
        return Game(self.field(), config)


# Cat 1 has to squeeze past cat 2 to reach the exit in the bottom wall.
FIRST_STEPS = Level(
    name="first-steps",
    title="First Steps",
    codes=(
        0x000100, 0x000100, 0x000100, 0x000100, 0x000100,
        0x000100, 0x311400, 0x102300, 0x202200, 0x000100,
        0x000100, 0x311300, 0x132300, 0x000000, 0x000100,
        0x000100, 0x311200, 0x132400, 0x000000, 0x000100,
        0x000100, 0x000100, 0x000001, 0x000100, 0x000100,
        5, 5,
    ),
)

# Three cats; the exit sits below cat 3 and cat 1 starts boxed in under cat 2.
CROSSING = Level(
    name="crossing",
    title="Crossing",
    codes=(
        0x000100, 0x000100, 0x000100, 0x000100, 0x000100, 0x000100, 0x000100,
        0x000100, 0x000000, 0x000000, 0x000000, 0x000000, 0x000000, 0x000100,
        0x000100, 0x000000, 0x000000, 0x122200, 0x000100, 0x133200, 0x000100,
        0x000100, 0x102300, 0x202300, 0x232300, 0x000100, 0x133300, 0x000100,
        0x000100, 0x032300, 0x022300, 0x022400, 0x000100, 0x133400, 0x000100,
        0x000100, 0x021200, 0x021300, 0x021400, 0x000100, 0x000001, 0x000100,
        0x000100, 0x000100, 0x000100, 0x000100, 0x000100, 0x000100, 0x000100,
        7, 7,
    ),
)

LEVELS: dict[str, Level] = {
    level.name: level for level in (FIRST_STEPS, CROSSING)
}


def get_level(name: str) -> Level:
    """Look up a built-in level by name."""
    try:
        return LEVELS[name]
    except KeyError:
        available = ", ".join(sorted(LEVELS))
        raise KeyError(
            f"Unknown level {name!r}. Available: {available}.",
        ) from None
