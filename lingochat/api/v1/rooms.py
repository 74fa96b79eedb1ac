"""Room endpoints: invite-based creation and listing."""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lingochat.api.deps import get_broadcaster, get_current_user, get_db
from lingochat.core.exceptions import UserNotFoundError
from lingochat.models.room import Room, room_participants
from lingochat.models.user import User
from lingochat.schemas.realtime import ROOM_CREATED
from lingochat.schemas.room import RoomCreateRequest, RoomPayload
from lingochat.services.chat.broadcaster import RoomBroadcaster

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.post("/create", response_model=RoomPayload)
async def create_room(
    body: RoomCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    broadcaster: RoomBroadcaster = Depends(get_broadcaster),
) -> RoomPayload:
    """Open a room between the current user and the invitee.

    Every connected client is told about the new room via ``room:created``.
    """
    result = await db.execute(
        select(User).where(User.email == body.invitee_email.lower())
    )
    invitee = result.scalar_one_or_none()
    if invitee is None:
        raise UserNotFoundError()

    participants = [user] if invitee.id == user.id else [user, invitee]
    room = Room(name=f"Chat with {invitee.name}", participants=participants)
    db.add(room)
    await db.flush()
    payload = RoomPayload.model_validate(room)
    # Listeners may query the room as soon as they hear about it.
    await db.commit()

    logger.info(
        "room_created",
        room_id=str(room.id),
        participants=[str(p.id) for p in participants],
    )
    await broadcaster.emit_global(ROOM_CREATED, payload.to_wire())
    return payload


@router.get("", response_model=list[RoomPayload])
async def list_rooms(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[RoomPayload]:
    """Rooms the current user participates in, oldest first."""
    result = await db.execute(
        select(Room)
        .join(room_participants, room_participants.c.room_id == Room.id)
        .where(room_participants.c.user_id == user.id)
        .order_by(Room.created_at.asc())
    )
    return [RoomPayload.model_validate(r) for r in result.scalars().all()]
