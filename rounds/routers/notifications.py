"""Live notification socket."""
from __future__ import annotations

import json
import logging
from uuid import UUID

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

from ..services.notification_stream import notification_stream_manager

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.websocket("/ws")
async def notifications_socket(
    websocket: WebSocket,
    user_id: UUID = Query(..., alias="user_id"),
) -> None:
    """Subscribe the connection to the notification channel of ``user_id``.

    The id is supplied by the authenticating gateway in front of this service.
    """

    await notification_stream_manager.connect(str(user_id), websocket)
    await websocket.send_text(json.dumps({"type": "ready"}))
    logger.info("Notification socket connected for user %s", user_id)
    try:
        while True:
            try:
                payload = await websocket.receive_text()
            except WebSocketDisconnect:
                break
            if payload.strip().lower() == "ping":
                await websocket.send_text(json.dumps({"type": "pong"}))
    finally:
        await notification_stream_manager.disconnect(websocket)
        logger.info("Notification socket disconnected for user %s", user_id)


__all__ = ["router"]
