"""In-memory session registry and per-session tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from arcade_snake.difficulty import DEFAULT_LEVELS, DifficultyTable
from arcade_snake.driver import TickDriver
from arcade_snake.engine import GameEngine, Snapshot
from arcade_snake.events import GameEvent
from arcade_snake.server.models import SessionSummary
from arcade_snake.timers import AsyncioScheduler

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 200


@dataclass
class GameSession:
    """One player's engine, its tick loop and attached sockets."""

    session_id: str
    engine: GameEngine
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    driver: TickDriver | None = field(default=None, repr=False)

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            difficulty=self.engine.difficulty,
            phase=self.engine.phase.value,
            score=self.engine.score,
            connected=len(self.sockets),
        )


def build_payload(snapshot: Snapshot, events: list[GameEvent]) -> str:
    """Encode a snapshot and its events as a compact JSON message."""
    return json.dumps(
        {
            "state": snapshot.to_dict(),
            "events": [e.to_dict() for e in events],
        },
        separators=(",", ":"),
    )


class SessionManager:
    """Central registry managing all game sessions."""

    def __init__(
        self,
        levels: DifficultyTable = DEFAULT_LEVELS,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.levels = levels
        self._sessions: dict[str, GameSession] = {}
        self._max_sessions = max_sessions

    def create_session(
        self, difficulty: int = 1, seed: int | None = None,
    ) -> GameSession:
        """Create a session and start its tick loop.

        Must be called with an event loop running.
        """
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Session limit reached. Try again later.")
        if difficulty not in self.levels:
            raise ValueError(f"Unknown difficulty level {difficulty}.")

        engine = GameEngine(
            difficulty=difficulty,
            levels=self.levels,
            seed=seed,
            scheduler=AsyncioScheduler(),
        )
        session = GameSession(session_id=uuid.uuid4().hex[:12], engine=engine)

        async def on_tick(snapshot: Snapshot, events: list[GameEvent]) -> None:
            await self._broadcast(session, build_payload(snapshot, events))

        session.driver = TickDriver(engine, on_tick=on_tick, lock=session.lock)
        session.driver.start()
        self._sessions[session.session_id] = session
        logger.info(
            "Session %s created (difficulty=%d).", session.session_id, difficulty,
        )
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def apply_action(self, session: GameSession, action: str) -> Snapshot:
        """Run a phase action ("toggle", "start", "pause", "reset")."""
        handlers = {
            "toggle": session.engine.toggle_running,
            "start": session.engine.start,
            "pause": session.engine.pause,
            "reset": session.engine.reset,
        }
        handler = handlers.get(action)
        if handler is None:
            raise ValueError(f"Unknown action {action!r}.")
        async with session.lock:
            handler()
            return await self._publish(session)

    async def apply_direction(
        self, session: GameSession, direction: object, accelerate: bool = False,
    ) -> Snapshot:
        async with session.lock:
            session.engine.request_direction(direction, accelerate)
            return await self._publish(session)

    async def apply_difficulty(self, session: GameSession, level: int) -> Snapshot:
        if level not in self.levels:
            raise ValueError(f"Unknown difficulty level {level}.")
        async with session.lock:
            session.engine.set_difficulty(level)
            return await self._publish(session)

    async def close_session(self, session_id: str) -> None:
        """Stop the tick loop, close sockets and forget the session."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        await self._shutdown(session)
        logger.info("Session %s closed.", session_id)

    async def _publish(self, session: GameSession) -> Snapshot:
        """Push the current state plus pending events to every socket."""
        snapshot = session.engine.snapshot()
        events = session.engine.drain_events()
        await self._broadcast(session, build_payload(snapshot, events))
        return snapshot

    async def _broadcast(self, session: GameSession, payload: str) -> None:
        dead: list[WebSocket] = []
        # Iterate over a copy so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)
        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def _shutdown(self, session: GameSession) -> None:
        if session.driver is not None:
            await session.driver.stop()
        session.engine.reset()
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.sockets.clear()

    async def cleanup(self) -> None:
        """Stop every session's tick loop."""
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            await self._shutdown(session)
        logger.info("SessionManager cleanup complete.")
