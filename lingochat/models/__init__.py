"""SQLAlchemy ORM models.

Individual models should be imported explicitly:
    from lingochat.models.user import User

All models are imported here so Alembic can detect them during migration
autogenerate and so relationship targets resolve. This module is imported
by alembic/env.py.
"""

from lingochat.models.message import Message
from lingochat.models.room import Room, room_participants
from lingochat.models.user import User

__all__ = [
    "User",
    "Room",
    "Message",
    "room_participants",
]
