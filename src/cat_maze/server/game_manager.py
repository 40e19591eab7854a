"""In-memory game registry and session lifecycle management."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field

from cat_maze.config import GameConfig, WinCondition
from cat_maze.field import Field
from cat_maze.game import Game
from cat_maze.levels import get_level
from cat_maze.server.models import GameStatus, GameSummary

logger = logging.getLogger(__name__)

# Simple rate limit: max games created per IP within the window.
_RATE_LIMIT_WINDOW = 60.0  # seconds
_RATE_LIMIT_MAX = 30
_MAX_WON_GAMES = 100
# Largest width or height accepted for client-supplied fields.
MAX_FIELD_SIZE = 64


class RateLimitError(Exception):
    """Raised when a client creates games too quickly."""


@dataclass
class GameSession:
    """All state for a single puzzle session."""

    game_id: str
    level: str | None
    codes: tuple[int, ...]
    config: GameConfig
    game: Game
    status: GameStatus = GameStatus.ACTIVE
    created_at: float = field(default_factory=time.monotonic)
    won_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def summary(self) -> GameSummary:
        return GameSummary(
            game_id=self.game_id,
            level=self.level,
            status=self.status,
            move_count=self.game.move_count,
            win_condition=self.config.win_condition.value,
        )


class GameManager:
    """Central registry managing all game sessions."""

    def __init__(self, max_won_games: int = _MAX_WON_GAMES) -> None:
        if max_won_games < 0:
            raise ValueError("max_won_games must be >= 0.")
        self._games: dict[str, GameSession] = {}
        self._rate_limits: dict[str, list[float]] = {}
        self._max_won_games = max_won_games

    def _check_rate_limit(self, client_ip: str) -> bool:
        """Return True if the client is within rate limits."""
        now = time.monotonic()
        timestamps = [
            t for t in self._rate_limits.get(client_ip, [])
            if now - t < _RATE_LIMIT_WINDOW
        ]
        if timestamps:
            self._rate_limits[client_ip] = timestamps
        else:
            self._rate_limits.pop(client_ip, None)
        return len(timestamps) < _RATE_LIMIT_MAX

    def _record_creation(self, client_ip: str) -> None:
        self._rate_limits.setdefault(client_ip, []).append(time.monotonic())

    def create_game(
        self,
        level: str | None = None,
        codes: Sequence[int] | None = None,
        text: str | None = None,
        win_condition: str | None = None,
        client_ip: str = "unknown",
    ) -> GameSession:
        """Start a session from a built-in level, raw codes or level text.

        Raises ``KeyError`` for an unknown level, ``FieldFormatError`` for a
        malformed or oversized field, ``ChainTopologyError`` for a cat whose
        links are broken and ``ValueError`` for a bad win condition.
        """
        if sum(s is not None for s in (level, codes, text)) != 1:
            raise ValueError("Provide exactly one of level, codes or text.")
        if not self._check_rate_limit(client_ip):
            raise RateLimitError("Rate limit exceeded. Try again later.")

        default_condition = WinCondition.ALL_ON_EXIT
        if level is not None:
            lvl = get_level(level)
            start = lvl.field()
            default_condition = lvl.win_condition
        elif codes is not None:
            start = Field.decode(codes, max_size=MAX_FIELD_SIZE)
        else:
            start = Field.parse(text, max_size=MAX_FIELD_SIZE)

        config = GameConfig(
            win_condition=WinCondition(win_condition or default_condition),
        )
        game = Game(start, config)
        game.check_chains()

        game_id = uuid.uuid4().hex[:12]
        session = GameSession(
            game_id=game_id,
            level=level,
            codes=tuple(int(c) for c in start.encode()),
            config=config,
            game=game,
        )
        self._games[game_id] = session
        self._record_creation(client_ip)
        logger.info(
            "Game %s created (%dx%d, level=%s).",
            game_id, start.width, start.height, level,
        )
        return session

    def get_game(self, game_id: str) -> GameSession | None:
        return self._games.get(game_id)

    def _require(self, game_id: str) -> GameSession:
        session = self._games.get(game_id)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        return session

    def list_games(self) -> list[GameSummary]:
        """Return summaries of all retained sessions."""
        return [s.summary() for s in self._games.values()]

    async def move(
        self, game_id: str, from_row: int, from_col: int, to_row: int, to_col: int,
    ) -> bool:
        """Apply one drag step. Returns whether the move was accepted."""
        session = self._require(game_id)
        async with session.lock:
            before = session.game.move_count
            session.game.move_cat(from_row, from_col, to_row, to_col)
            accepted = session.game.move_count != before
            if accepted:
                self._update_status(session)
        return accepted

    async def reset_game(self, game_id: str) -> GameSession:
        """Restore a session to its starting field."""
        session = self._require(game_id)
        async with session.lock:
            session.game = Game(Field.decode(session.codes), session.config)
            session.status = GameStatus.ACTIVE
            session.won_at = None
        logger.info("Game %s reset.", game_id)
        return session

    def delete_game(self, game_id: str) -> None:
        self._require(game_id)
        del self._games[game_id]
        logger.info("Game %s deleted.", game_id)

    def _update_status(self, session: GameSession) -> None:
        if session.status == GameStatus.ACTIVE and session.game.is_won():
            session.status = GameStatus.WON
            session.won_at = time.monotonic()
            logger.info(
                "Game %s won after %d moves.",
                session.game_id, session.game.move_count,
            )
            self._prune_won_games()

    def _prune_won_games(self) -> None:
        """Bound retained won games to avoid unbounded registry growth."""
        won = [g for g in self._games.values() if g.status == GameStatus.WON]
        overflow = len(won) - self._max_won_games
        if overflow <= 0:
            return

        won.sort(key=lambda g: g.won_at if g.won_at is not None else g.created_at)
        for stale in won[:overflow]:
            self._games.pop(stale.game_id, None)
        logger.info(
            "Pruned %d won games (retaining up to %d).",
            overflow,
            self._max_won_games,
        )

    async def cleanup(self) -> None:
        """Drop all sessions and rate-limit state."""
        self._games.clear()
        self._rate_limits.clear()
        logger.info("GameManager cleanup complete.")
