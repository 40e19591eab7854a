"""REST API route handlers for level listing and game sessions."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from cat_maze.field import FieldFormatError
from cat_maze.game import ChainTopologyError
from cat_maze.levels import LEVELS
from cat_maze.server.game_manager import GameManager, RateLimitError
from cat_maze.server.models import (
    CreateGameRequest,
    GameSummary,
    LevelSummary,
    MoveRequest,
    MoveResponse,
)

router = APIRouter(tags=["games"])


def _get_manager(request: Request) -> GameManager:
    return request.app.state.game_manager


@router.get("/levels")
async def list_levels() -> list[LevelSummary]:
    """List the built-in levels."""
    results: list[LevelSummary] = []
    for level in LEVELS.values():
        field = level.field()
        results.append(
            LevelSummary(
                name=level.name,
                title=level.title,
                width=field.width,
                height=field.height,
                win_condition=level.win_condition.value,
            )
        )
    return results


@router.post("/games", status_code=201)
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Start a new game session."""
    manager = _get_manager(request)
    client_ip = request.client.host if request.client else "unknown"
    try:
        session = manager.create_game(
            level=body.level,
            codes=body.codes,
            text=body.text,
            win_condition=body.win_condition,
            client_ip=client_ip,
        )
    except RateLimitError as exc:
        raise HTTPException(status_code=429, detail=str(exc)) from exc
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0]) from exc
    except (FieldFormatError, ChainTopologyError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("/games")
async def list_games(request: Request) -> list[GameSummary]:
    """List retained game sessions."""
    return _get_manager(request).list_games()


@router.get("/games/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get session metadata and the full game state."""
    session = _get_manager(request).get_game(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    result = session.summary().model_dump(mode="json")
    result["state"] = session.game.get_state()
    return result


@router.post("/games/{game_id}/moves")
async def move(game_id: str, body: MoveRequest, request: Request) -> MoveResponse:
    """Apply one drag step; illegal moves are reported, not errors."""
    manager = _get_manager(request)
    try:
        accepted = await manager.move(
            game_id, body.from_row, body.from_col, body.to_row, body.to_col,
        )
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0]) from exc
    except ChainTopologyError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    session = manager.get_game(game_id)
    state = session.game.get_state() if session is not None else {}
    return MoveResponse(accepted=accepted, state=state)


@router.post("/games/{game_id}/reset")
async def reset_game(game_id: str, request: Request) -> GameSummary:
    """Restore the session's starting field."""
    try:
        session = await _get_manager(request).reset_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0]) from exc
    return session.summary()


@router.delete("/games/{game_id}", status_code=204)
async def delete_game(game_id: str, request: Request) -> Response:
    """Discard a session."""
    try:
        _get_manager(request).delete_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0]) from exc
    return Response(status_code=204)
