"""Bidirectional real-time channel.

Every frame is a JSON envelope ``{"event": <name>, "data": <payload>}``.

Client → server:
  - ``join:room``     data = room id
  - ``leave:room``    data = room id
  - ``message:send``  data = {text, senderId, roomId, timestamp?}

Server → client:
  - ``message:received``  to every connection joined to the message's room
  - ``room:created``      to every connection
  - ``error``             to the offending connection only

Each ``message:send`` runs the ingestion pipeline on its own task so a slow
translation never blocks this connection's receive loop.
"""

from __future__ import annotations

import asyncio
from typing import Any
from uuid import UUID

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from lingochat.core.exceptions import (
    InvalidPayloadError,
    LingoChatError,
    UnknownEventError,
)
from lingochat.schemas.message import InboundMessage
from lingochat.schemas.realtime import (
    ERROR,
    JOIN_ROOM,
    LEAVE_ROOM,
    MESSAGE_SEND,
    Envelope,
)
from lingochat.services.chat.broadcaster import RoomBroadcaster
from lingochat.services.chat.ingestion import MessageIngestionPipeline

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["realtime"])


def _room_id(data: Any) -> str:
    try:
        return str(UUID(str(data)))
    except (TypeError, ValueError) as e:
        raise InvalidPayloadError(f"Invalid room id: {data!r}") from e


@router.websocket("/ws")
async def realtime_channel(websocket: WebSocket) -> None:
    broadcaster: RoomBroadcaster = websocket.app.state.broadcaster
    pipeline: MessageIngestionPipeline = websocket.app.state.ingestion_pipeline
    pending: set[asyncio.Task] = websocket.app.state.ingest_tasks

    await websocket.accept()
    connection_id = broadcaster.connect(websocket)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            raw = message.get("text")
            try:
                await _dispatch(connection_id, raw, broadcaster, pipeline, pending)
            except LingoChatError as e:
                logger.info(
                    "ws_frame_rejected",
                    connection_id=connection_id,
                    code=e.code,
                    error=e.message,
                )
                await broadcaster.send(connection_id, ERROR, e.to_dict())
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.disconnect(connection_id)


async def _dispatch(
    connection_id: str,
    raw: str | None,
    broadcaster: RoomBroadcaster,
    pipeline: MessageIngestionPipeline,
    pending: set[asyncio.Task],
) -> None:
    if raw is None:
        raise InvalidPayloadError("Frames must be JSON text, not binary")
    try:
        envelope = Envelope.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidPayloadError("Frame must be a JSON object with an 'event' field") from e

    if envelope.event == JOIN_ROOM:
        broadcaster.join(connection_id, _room_id(envelope.data))
    elif envelope.event == LEAVE_ROOM:
        broadcaster.leave(connection_id, _room_id(envelope.data))
    elif envelope.event == MESSAGE_SEND:
        try:
            inbound = InboundMessage.model_validate(envelope.data)
        except ValidationError as e:
            raise InvalidPayloadError(
                f"Invalid message payload: {e.error_count()} validation error(s)"
            ) from e
        task = asyncio.create_task(pipeline.ingest(inbound))
        pending.add(task)
        task.add_done_callback(pending.discard)
    else:
        raise UnknownEventError(f"Unknown event: {envelope.event}")
