"""User ORM model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from lingochat.db.database import Base

DEFAULT_AVATAR_URL = "https://i.pravatar.cc/150"


def avatar_for(email: str) -> str:
    return f"{DEFAULT_AVATAR_URL}?u={email}"


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    preferred_language: Mapped[str] = mapped_column(
        String(2), nullable=False, default="en"
    )  # 'en' | 'ta'
    avatar: Mapped[str] = mapped_column(Text, nullable=False, default=DEFAULT_AVATAR_URL)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
