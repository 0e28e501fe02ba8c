"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from arcade_snake.server.session_manager import (
    GameSession,
    SessionManager,
    build_payload,
)

logger = logging.getLogger(__name__)

ws_router = APIRouter()

_ACTIONS = frozenset({"toggle", "start", "pause", "reset"})


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


async def _handle_message(
    manager: SessionManager, session: GameSession, msg: dict,
) -> None:
    """Dispatch one client message; anything unrecognised is dropped."""
    if "direction" in msg:
        accelerate = msg.get("accelerate") is True
        await manager.apply_direction(session, msg["direction"], accelerate)
        return

    action = msg.get("action")
    if isinstance(action, str) and action in _ACTIONS:
        await manager.apply_action(session, action)
        return

    level = msg.get("difficulty")
    if isinstance(level, int) and not isinstance(level, bool):
        try:
            await manager.apply_difficulty(session, level)
        except ValueError:
            logger.debug("Ignoring unknown difficulty %r.", level)


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send inputs, receive state after every change."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Client connected to session %s.", session_id)

    # Send an initial snapshot so the client can render immediately.
    await websocket.send_text(build_payload(session.engine.snapshot(), []))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            await _handle_message(manager, session, msg)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
