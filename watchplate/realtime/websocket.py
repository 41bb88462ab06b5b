# -*- coding: utf-8 -*-
"""
Realtime WebSocket module

Pushes the synced state to connected presentation clients after every merge.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional
from uuid import uuid4

from fastapi import WebSocket, WebSocketDisconnect

from ..sync.metrics import build_summary
from ..sync.models import NutritionState
from ..sync.store import NutritionStore

logger = logging.getLogger(__name__)


@dataclass
class SubscriberState:
    """Per-connection state"""
    session_id: str
    connected_at: datetime
    outbox: asyncio.Queue
    sent_count: int = 0
    unsubscribe: Optional[Callable[[], None]] = field(default=None, repr=False)


def offer_latest(outbox: asyncio.Queue, item: Any) -> None:
    """Put an item, replacing whatever is still waiting in a full outbox."""
    if outbox.full():
        outbox.get_nowait()
    outbox.put_nowait(item)


def state_message(state: NutritionState) -> dict:
    return {
        "type": "state",
        "state": state.model_dump(by_alias=True),
        "summary": build_summary(state).model_dump(),
        "timestamp": datetime.now().isoformat(),
    }


class RealtimeManager:
    """Fans store changes out to websocket subscribers."""

    def __init__(self, store: NutritionStore):
        self.store = store
        # active connections
        self.active_connections: Dict[str, WebSocket] = {}
        self.subscribers: Dict[str, SubscriberState] = {}

    async def connect(self, websocket: WebSocket, session_id: Optional[str] = None) -> str:
        """
        Accept a websocket and subscribe it to store changes.

        Args:
            websocket: WebSocket connection
            session_id: optional id, generated when missing

        Returns:
            str: session id
        """
        await websocket.accept()

        if not session_id:
            session_id = str(uuid4())

        loop = asyncio.get_running_loop()
        # Only the newest state matters to a slow client.
        outbox: asyncio.Queue = asyncio.Queue(maxsize=1)

        def _on_change(state: NutritionState) -> None:
            # Listeners may fire off the loop thread.
            loop.call_soon_threadsafe(offer_latest, outbox, state)

        subscriber = SubscriberState(
            session_id=session_id,
            connected_at=datetime.now(),
            outbox=outbox,
        )
        subscriber.unsubscribe = self.store.subscribe(_on_change)
        self.active_connections[session_id] = websocket
        self.subscribers[session_id] = subscriber

        logger.info("WebSocket connected: %s", session_id)

        await self._send_message(session_id, state_message(self.store.snapshot()))
        return session_id

    def disconnect(self, session_id: str) -> None:
        websocket = self.active_connections.pop(session_id, None)
        subscriber = self.subscribers.pop(session_id, None)
        if subscriber is not None and subscriber.unsubscribe is not None:
            subscriber.unsubscribe()
        if websocket is not None or subscriber is not None:
            logger.info("WebSocket disconnected: %s", session_id)

    async def pump(self, session_id: str) -> None:
        """Forward queued state changes until the connection goes away."""
        subscriber = self.subscribers.get(session_id)
        if subscriber is None:
            return
        try:
            while session_id in self.active_connections:
                state = await subscriber.outbox.get()
                await self._send_message(session_id, state_message(state))
        except Exception as exc:
            logger.error("State push failed for %s: %s", session_id, exc)
            self.disconnect(session_id)

    def handle_client_message(self, data: Any) -> dict:
        if isinstance(data, dict) and data.get("type") == "ping":
            return {"type": "pong", "timestamp": datetime.now().isoformat()}
        if isinstance(data, dict) and data.get("type") == "snapshot":
            return state_message(self.store.snapshot())
        return {"type": "error", "message": "Unsupported message"}

    async def _send_message(self, session_id: str, message: dict) -> None:
        websocket = self.active_connections.get(session_id)
        if websocket is None:
            return
        await websocket.send_json(message)
        subscriber = self.subscribers.get(session_id)
        if subscriber is not None:
            subscriber.sent_count += 1

    def list_sessions(self) -> list:
        return [self.get_session_summary(sid) for sid in list(self.subscribers)]

    def get_session_summary(self, session_id: str) -> Optional[dict]:
        subscriber = self.subscribers.get(session_id)
        if subscriber is None:
            return None
        return {
            "session_id": subscriber.session_id,
            "connected_at": subscriber.connected_at.isoformat(),
            "sent_count": subscriber.sent_count,
            "duration_seconds": (datetime.now() - subscriber.connected_at).total_seconds(),
        }


async def websocket_endpoint(
    websocket: WebSocket,
    session_id: Optional[str] = None,
):
    """WebSocket endpoint: state pushes out, ping/snapshot requests in."""
    manager: RealtimeManager = websocket.app.state.realtime
    sid = await manager.connect(websocket, session_id)
    pump = asyncio.create_task(manager.pump(sid))

    try:
        while True:
            data = await websocket.receive_json()
            await manager._send_message(sid, manager.handle_client_message(data))
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error("WebSocket error: %s", e)
    finally:
        manager.disconnect(sid)
        pump.cancel()
        try:
            await pump
        except asyncio.CancelledError:
            pass
