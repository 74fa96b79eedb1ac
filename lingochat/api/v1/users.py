"""Current-user endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lingochat.api.deps import get_current_user, get_db
from lingochat.models.user import User
from lingochat.schemas.user import LanguageUpdateRequest, UserPublic

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserPublic)
async def get_me(user: User = Depends(get_current_user)) -> UserPublic:
    return UserPublic.model_validate(user)


@router.put("/me/language", response_model=UserPublic)
async def update_language(
    body: LanguageUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> UserPublic:
    """Change the display language the client renders messages in."""
    user.preferred_language = body.preferred_language.value
    await db.flush()
    return UserPublic.model_validate(user)
