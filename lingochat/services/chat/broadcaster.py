"""In-process registry of live WebSocket connections and their joined rooms.

One RoomBroadcaster is created per process in the FastAPI lifespan. A
connection only ever receives room events for rooms it has joined; global
events (``room:created``) go to every connection.
"""

from __future__ import annotations

import uuid
from collections import defaultdict
from typing import Any, Protocol

import structlog

logger = structlog.get_logger(__name__)


class JSONSender(Protocol):
    """The slice of ``starlette.websockets.WebSocket`` the broadcaster uses."""

    async def send_json(self, data: Any, mode: str = "text") -> None:
        ...


class RoomBroadcaster:
    def __init__(self) -> None:
        self._connections: dict[str, JSONSender] = {}
        self._rooms: dict[str, set[str]] = defaultdict(set)

    def connect(self, websocket: JSONSender) -> str:
        """Register a socket; returns its connection id."""
        connection_id = uuid.uuid4().hex
        self._connections[connection_id] = websocket
        logger.info("ws_connected", connection_id=connection_id)
        return connection_id

    def join(self, connection_id: str, room_id: str) -> None:
        if connection_id not in self._connections:
            return
        self._rooms[str(room_id)].add(connection_id)
        logger.info("ws_joined_room", connection_id=connection_id, room_id=str(room_id))

    def leave(self, connection_id: str, room_id: str) -> None:
        members = self._rooms.get(str(room_id))
        if members is None:
            return
        members.discard(connection_id)
        if not members:
            del self._rooms[str(room_id)]

    def disconnect(self, connection_id: str) -> None:
        """Forget a connection and every room membership it held."""
        self._connections.pop(connection_id, None)
        for room_id in list(self._rooms):
            self.leave(connection_id, room_id)
        logger.info("ws_disconnected", connection_id=connection_id)

    def members(self, room_id: str) -> set[str]:
        return set(self._rooms.get(str(room_id), ()))

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def send(self, connection_id: str, event: str, data: Any) -> None:
        """Send one event to a single connection."""
        websocket = self._connections.get(connection_id)
        if websocket is None:
            return
        await self._deliver(connection_id, websocket, {"event": event, "data": data})

    async def emit_to_room(self, room_id: str, event: str, data: Any) -> int:
        """Send an event to every connection joined to ``room_id``.

        Returns the number of connections it was delivered to.
        """
        frame = {"event": event, "data": data}
        delivered = 0
        for connection_id in self.members(room_id):
            websocket = self._connections.get(connection_id)
            if websocket is not None and await self._deliver(connection_id, websocket, frame):
                delivered += 1
        return delivered

    async def emit_global(self, event: str, data: Any) -> int:
        frame = {"event": event, "data": data}
        delivered = 0
        for connection_id, websocket in list(self._connections.items()):
            if await self._deliver(connection_id, websocket, frame):
                delivered += 1
        return delivered

    async def _deliver(self, connection_id: str, websocket: JSONSender, frame: dict) -> bool:
        # A dead socket is dropped; delivery to the others continues.
        try:
            await websocket.send_json(frame)
            return True
        except Exception as e:
            logger.warning(
                "ws_send_failed",
                connection_id=connection_id,
                ws_event=frame["event"],
                error=str(e),
            )
            self.disconnect(connection_id)
            return False
