"""Game rule configuration."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


class WinCondition(str, enum.Enum):
    """How :meth:`Game.is_won` judges the target cat's position."""

    # Every cat segment on the field belongs to the target cat and sits on an
    # exit tile.
    ALL_ON_EXIT = "all"
    # At least one segment of the target cat sits on an exit tile.
    ANY_ON_EXIT = "any"


@dataclass(frozen=True)
class GameConfig:
    """Rules applied by a :class:`~cat_maze.game.Game`."""

    win_condition: WinCondition = WinCondition.ALL_ON_EXIT
    target_cat_id: int = 1

    def __post_init__(self) -> None:
        # Accept the plain string values as read back from JSON.
        object.__setattr__(self, "win_condition", WinCondition(self.win_condition))
        if not 1 <= self.target_cat_id <= 15:
            raise ValueError("target_cat_id must be between 1 and 15.")

    def to_dict(self) -> dict:
        return {
            "win_condition": self.win_condition.value,
            "target_cat_id": self.target_cat_id,
        }

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
