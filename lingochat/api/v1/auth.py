"""Registration and login endpoints."""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lingochat.api.deps import get_db
from lingochat.core.exceptions import (
    EmailAlreadyExistsError,
    InvalidPasswordError,
    UserNotFoundError,
)
from lingochat.core.security import create_jwt_token, hash_password, verify_password
from lingochat.models.user import User, avatar_for
from lingochat.schemas.user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserPublic,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
    token = create_jwt_token({"id": str(user.id), "email": user.email})
    return AuthResponse(token=token, user=UserPublic.model_validate(user))


@router.post("/register", response_model=AuthResponse)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Create an account and return a bearer token."""
    email = body.email.lower()
    existing = await db.execute(select(User).where(User.email == email))
    if existing.scalar_one_or_none() is not None:
        raise EmailAlreadyExistsError()

    user = User(
        email=email,
        password_hash=hash_password(body.password),
        name=body.name,
        preferred_language=body.preferred_language.value,
        avatar=avatar_for(email),
    )
    db.add(user)
    await db.flush()

    logger.info("user_registered", user_id=str(user.id))
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Exchange email and password for a bearer token."""
    result = await db.execute(select(User).where(User.email == body.email.lower()))
    user = result.scalar_one_or_none()
    if user is None:
        raise UserNotFoundError(status_code=400)
    if not verify_password(body.password, user.password_hash):
        raise InvalidPasswordError()

    logger.info("user_logged_in", user_id=str(user.id))
    return _auth_response(user)
