"""Per-user WebSocket channels used as the live notification transport."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class LiveChannel(Protocol):
    """Publish primitive: deliver ``payload`` to every connection in ``group_key``."""

    def publish_to_group(self, group_key: str, event_name: str, payload: dict[str, Any]) -> None:
        ...


class NotificationStreamManager:
    """Tracks per-user WebSocket connections and broadcasts payloads."""

    def __init__(self) -> None:
        self._channels: dict[str, set[WebSocket]] = {}
        self._connections: dict[WebSocket, str] = {}
        self._lock = asyncio.Lock()
        self._tasks: set[asyncio.Task[int]] = set()

    async def connect(self, group_key: str, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            group = self._channels.setdefault(group_key, set())
            group.add(websocket)
            self._connections[websocket] = group_key

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            group_key = self._connections.pop(websocket, None)
            if not group_key:
                return
            group = self._channels.get(group_key)
            if group is None:
                return
            group.discard(websocket)
            if not group:
                self._channels.pop(group_key, None)

    def connection_count(self, group_key: str) -> int:
        return len(self._channels.get(group_key, ()))

    async def broadcast(self, group_key: str, message: dict[str, Any]) -> int:
        """Send ``message`` to every socket in the group; returns the delivered count."""

        if not group_key:
            return 0
        serialized = json.dumps(message, default=str)
        async with self._lock:
            targets = list(self._channels.get(group_key, ()))
        delivered = 0
        for ws in targets:
            try:
                await ws.send_text(serialized)
                delivered += 1
            except Exception:
                logger.warning("Dropping notification socket for %s after failed send", group_key)
                await self.disconnect(ws)
        return delivered

    def publish_to_group(self, group_key: str, event_name: str, payload: dict[str, Any]) -> None:
        message = {"type": event_name, "payload": payload}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.info("No running event loop; live push to %s skipped", group_key)
            return
        task = loop.create_task(self.broadcast(group_key, message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def pending_pushes(self) -> int:
        return len(self._tasks)


notification_stream_manager = NotificationStreamManager()


__all__ = ["LiveChannel", "NotificationStreamManager", "notification_stream_manager"]
