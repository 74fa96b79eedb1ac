"""Chat room ORM model and its participant association table."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lingochat.db.database import Base

room_participants = Table(
    "room_participants",
    Base.metadata,
    Column("room_id", Uuid, ForeignKey("rooms.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    # Room listing filters on user_id alone.
    Index("ix_room_participants_user_id", "user_id"),
)


class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Participants are always needed when a room is serialized, so load eagerly.
    participants: Mapped[list["User"]] = relationship(  # noqa: F821
        secondary=room_participants, lazy="selectin"
    )
    messages: Mapped[list["Message"]] = relationship(  # noqa: F821
        back_populates="room", lazy="raise"
    )
