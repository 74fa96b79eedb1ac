"""Message history endpoint."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lingochat.api.deps import get_current_user, get_db
from lingochat.core.exceptions import RoomNotFoundError
from lingochat.models.message import Message
from lingochat.models.room import Room
from lingochat.models.user import User
from lingochat.schemas.message import MessagePayload

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/{room_id}", response_model=list[MessagePayload])
async def get_room_messages(
    room_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[MessagePayload]:
    """All messages in a room ordered by timestamp, sender populated."""
    room = await db.get(Room, room_id)
    if room is None:
        raise RoomNotFoundError()

    result = await db.execute(
        select(Message)
        .options(selectinload(Message.sender))
        .where(Message.room_id == room_id)
        .order_by(Message.timestamp.asc())
    )
    return [MessagePayload.model_validate(m) for m in result.scalars().all()]
