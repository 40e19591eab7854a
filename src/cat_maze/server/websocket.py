"""WebSocket handler for interactive drag play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from cat_maze.game import ChainTopologyError
from cat_maze.server.game_manager import GameManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> GameManager:
    return ws.app.state.game_manager


def _parse_cell(value: object) -> tuple[int, int] | None:
    if (
        isinstance(value, list)
        and len(value) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    ):
        return value[0], value[1]
    return None


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str) -> None:
    """Receive ``{"from": [r, c], "to": [r, c]}`` drag steps, reply with state."""
    manager = _get_manager(websocket)
    session = manager.get_game(game_id)
    if session is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    logger.info("Player connected to game %s.", game_id)

    # Send initial state snapshot so the client can draw the board.
    await websocket.send_text(
        json.dumps(session.game.get_state(), separators=(",", ":")),
    )

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            src = _parse_cell(msg.get("from"))
            dst = _parse_cell(msg.get("to"))
            if src is None or dst is None:
                continue

            try:
                accepted = await manager.move(game_id, *src, *dst)
            except KeyError:
                await websocket.close(code=4004, reason="Game not found.")
                return
            except ChainTopologyError as exc:
                logger.warning("Game %s has a broken cat: %s", game_id, exc)
                await websocket.close(code=4009, reason="Broken cat chain.")
                return
            payload = {"accepted": accepted, "state": session.game.get_state()}
            await websocket.send_text(json.dumps(payload, separators=(",", ":")))
    except WebSocketDisconnect:
        logger.info("Player disconnected from game %s.", game_id)
