"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from arcade_snake.difficulty import DEFAULT_LEVELS, DifficultyTable
from arcade_snake.server.routes import router
from arcade_snake.server.session_manager import SessionManager
from arcade_snake.server.websocket import ws_router


def create_app(levels: DifficultyTable = DEFAULT_LEVELS) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(levels=levels)
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(title="Arcade Snake API", version="0.1.0", lifespan=lifespan)
    app.include_router(router)
    app.include_router(ws_router)
    return app
