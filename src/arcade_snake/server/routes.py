"""REST API route handlers for session lifecycle and input."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from arcade_snake.server.models import (
    Action,
    CreateSessionRequest,
    DifficultyInfo,
    DifficultyRequest,
    DirectionRequest,
    ErrorResponse,
    SessionSummary,
)
from arcade_snake.server.session_manager import GameSession, SessionManager

router = APIRouter(tags=["sessions"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Unknown session."}}
_INVALID = {422: {"model": ErrorResponse, "description": "Rejected setting."}}


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _get_session(request: Request, session_id: str) -> GameSession:
    try:
        return _get_manager(request).require_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.get("/difficulties")
async def list_difficulties(request: Request) -> list[DifficultyInfo]:
    """Return the configured difficulty table."""
    levels = _get_manager(request).levels
    return [
        DifficultyInfo(
            level=lvl.level,
            name=lvl.name,
            subtitle=lvl.subtitle,
            interval_ms=lvl.interval_ms,
            accelerated_interval_ms=lvl.accelerated_interval_ms,
        )
        for lvl in levels.values()
    ]


@router.post("/sessions", status_code=201, responses=_INVALID)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new single-player session."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(difficulty=body.difficulty, seed=body.seed)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("/sessions")
async def list_sessions(request: Request) -> list[SessionSummary]:
    return _get_manager(request).list_sessions()


@router.get("/sessions/{session_id}", responses=_NOT_FOUND)
async def get_session(session_id: str, request: Request) -> dict:
    """Return the current snapshot of a session."""
    session = _get_session(request, session_id)
    return session.engine.snapshot().to_dict()


@router.delete("/sessions/{session_id}", responses=_NOT_FOUND)
async def delete_session(session_id: str, request: Request) -> dict:
    manager = _get_manager(request)
    try:
        await manager.close_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    return {"status": "closed", "session_id": session_id}


@router.post("/sessions/{session_id}/direction", responses=_NOT_FOUND)
async def request_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> dict:
    """Queue a direction; malformed directions are ignored."""
    session = _get_session(request, session_id)
    snapshot = await _get_manager(request).apply_direction(
        session, body.direction, body.accelerate,
    )
    return snapshot.to_dict()


@router.post(
    "/sessions/{session_id}/difficulty", responses={**_NOT_FOUND, **_INVALID},
)
async def set_difficulty(
    session_id: str, body: DifficultyRequest, request: Request,
) -> dict:
    session = _get_session(request, session_id)
    try:
        snapshot = await _get_manager(request).apply_difficulty(session, body.level)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return snapshot.to_dict()


@router.post("/sessions/{session_id}/{action}", responses=_NOT_FOUND)
async def apply_action(session_id: str, action: Action, request: Request) -> dict:
    """Toggle, start, pause or reset the game."""
    session = _get_session(request, session_id)
    snapshot = await _get_manager(request).apply_action(session, action)
    return snapshot.to_dict()
