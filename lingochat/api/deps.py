"""Shared FastAPI dependencies: auth, database sessions, service injection.

The session factory, broadcaster and ingestion pipeline are created once
during the FastAPI lifespan and stored on app.state. Request handlers
retrieve them via Depends(), never by direct import.
"""

from collections.abc import AsyncGenerator
from uuid import UUID

from fastapi import Depends, Header, Request
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lingochat.core.exceptions import AccessDeniedError, InvalidTokenError
from lingochat.core.security import decode_jwt_token
from lingochat.db.database import session_scope
from lingochat.models.user import User
from lingochat.services.chat.broadcaster import RoomBroadcaster


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session bound to the app's session factory."""
    async with session_scope(request.app.state.session_factory) as session:
        yield session


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or not parts[1].strip():
        return None
    return parts[1].strip()


async def get_current_user(
    authorization: str | None = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Authenticate the ``Authorization: Bearer <jwt>`` header and load the user."""
    token = _bearer_token(authorization)
    if token is None:
        raise AccessDeniedError()

    try:
        claims = decode_jwt_token(token)
        user_id = UUID(str(claims["id"]))
    except (JWTError, KeyError, ValueError) as e:
        raise InvalidTokenError() from e

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise InvalidTokenError()
    return user


# ---------------------------------------------------------------------------
# Service singletons, set on app.state during lifespan
# ---------------------------------------------------------------------------

def get_broadcaster(request: Request) -> RoomBroadcaster:
    """Return the process-wide RoomBroadcaster."""
    return request.app.state.broadcaster
