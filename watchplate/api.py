# -*- coding: utf-8 -*-
"""
WatchPlate companion sync API

Receives nutrition/weight/hydration state from the paired phone, serves the
derived progress values to watch screens and builds recipe bot requests.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from .assistant.api import router as assistant_router
from .config import settings
from .realtime.websocket import RealtimeManager, websocket_endpoint
from .sync.api import router as sync_router
from .sync.channel import SyncChannel
from .sync.storage import load_context
from .sync.store import NutritionStore

logger = logging.getLogger(__name__)


def replay_stored_context(store: NutritionStore, data_root: Optional[Path] = None) -> bool:
    """Merge the last persisted context snapshot into the store, if there is one."""
    context = load_context(data_root)
    if context is None:
        return False
    store.merge(context)
    logger.info("Replayed stored context (%d keys)", len(context))
    return True


def create_app(
    store: Optional[NutritionStore] = None,
    data_root: Optional[Path] = None,
    replay_context: Optional[bool] = None,
) -> FastAPI:
    store = store if store is not None else NutritionStore()
    data_root = data_root if data_root is not None else settings.data_root
    replay = settings.replay_context if replay_context is None else replay_context
    channel = SyncChannel(store, maxsize=settings.sync_queue_size)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if replay:
            replay_stored_context(store, data_root)
        channel.start()
        try:
            yield
        finally:
            await channel.stop()

    app = FastAPI(
        title="WatchPlate Companion Sync",
        description="Paired-device nutrition state sync and derived progress metrics",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store
    app.state.channel = channel
    app.state.data_root = data_root
    app.state.realtime = RealtimeManager(store)

    app.include_router(sync_router)
    app.include_router(assistant_router)

    @app.get("/api/health")
    async def health() -> dict:
        return {
            "status": "ok",
            "channel_running": channel.running,
            "merge_count": store.merge_count,
        }

    @app.get("/api/realtime/sessions")
    async def realtime_sessions() -> dict:
        sessions = app.state.realtime.list_sessions()
        return {"sessions": sessions, "count": len(sessions)}

    @app.websocket("/ws/state")
    async def state_socket(websocket: WebSocket, session_id: Optional[str] = None):
        await websocket_endpoint(websocket, session_id)

    return app


app = create_app()


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logger.info("Serving on %s:%s", settings.host, settings.port)
    uvicorn.run("watchplate.api:app", host=settings.host, port=settings.port, reload=False)
