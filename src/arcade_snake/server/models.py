"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Action = Literal["toggle", "start", "pause", "reset"]


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    difficulty: int = Field(default=1, ge=1)
    seed: int | None = None


class DifficultyRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/difficulty."""

    level: int = Field(ge=1)


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: str = Field(min_length=1, max_length=16)
    accelerate: bool = False


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    difficulty: int
    phase: str
    score: int
    connected: int


class DifficultyInfo(BaseModel):
    """One row of the difficulty table."""

    level: int
    name: str
    subtitle: str
    interval_ms: int
    accelerated_interval_ms: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
