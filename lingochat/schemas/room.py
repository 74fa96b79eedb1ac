"""Room request/response schemas."""

import uuid
from datetime import datetime

from pydantic import EmailStr

from lingochat.schemas.base import CamelModel
from lingochat.schemas.user import UserPublic


class RoomCreateRequest(CamelModel):
    """POST /api/rooms/create request body."""

    invitee_email: EmailStr


class RoomPayload(CamelModel):
    """A room with its participants, as returned by REST and ``room:created``."""

    id: uuid.UUID
    name: str
    participants: list[UserPublic]
    created_at: datetime
