"""Real-time channel frame schemas."""

from typing import Any

from pydantic import BaseModel

JOIN_ROOM = "join:room"
LEAVE_ROOM = "leave:room"
MESSAGE_SEND = "message:send"
MESSAGE_RECEIVED = "message:received"
ROOM_CREATED = "room:created"
ERROR = "error"


class Envelope(BaseModel):
    """Every WebSocket frame in either direction: ``{"event": ..., "data": ...}``."""

    event: str
    data: Any = None
