"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field, model_validator


class GameStatus(str, enum.Enum):
    """Lifecycle states for a game session."""

    ACTIVE = "active"
    WON = "won"


class CreateGameRequest(BaseModel):
    """Request body for POST /games.

    Exactly one of ``level``, ``codes`` or ``text`` selects the start field.
    """

    level: str | None = None
    codes: list[int] | None = Field(default=None, min_length=2)
    text: str | None = Field(default=None, min_length=1)
    win_condition: str | None = None

    @model_validator(mode="after")
    def _one_source(self) -> CreateGameRequest:
        sources = [s for s in (self.level, self.codes, self.text) if s is not None]
        if len(sources) != 1:
            raise ValueError("Provide exactly one of level, codes or text.")
        return self


class MoveRequest(BaseModel):
    """Request body for POST /games/{game_id}/moves."""

    from_row: int
    from_col: int
    to_row: int
    to_col: int


class LevelSummary(BaseModel):
    """Catalog entry for GET /levels."""

    name: str
    title: str
    width: int
    height: int
    win_condition: str


class GameSummary(BaseModel):
    """Compact game info for list endpoints."""

    game_id: str
    level: str | None
    status: GameStatus
    move_count: int
    win_condition: str


class MoveResponse(BaseModel):
    """Outcome of a drag step plus the resulting state."""

    accepted: bool
    state: dict
