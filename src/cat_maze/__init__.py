"""Cat Maze — tile codec and cat movement engine."""

from cat_maze.config import GameConfig, WinCondition
from cat_maze.field import Field, FieldFormatError
from cat_maze.game import ChainTopologyError, Game
from cat_maze.levels import LEVELS, Level, get_level
from cat_maze.tile import BackgroundType, Direction, ForegroundType, Tile

__all__ = [
    "LEVELS",
    "BackgroundType",
    "ChainTopologyError",
    "Direction",
    "Field",
    "FieldFormatError",
    "ForegroundType",
    "Game",
    "GameConfig",
    "Level",
    "Tile",
    "WinCondition",
    "get_level",
]
