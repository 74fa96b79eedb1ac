"""Auth and user request/response schemas."""

import uuid
from datetime import datetime

from pydantic import EmailStr, Field

from lingochat.schemas.base import CamelModel
from lingochat.services.language.detector import Language


class RegisterRequest(CamelModel):
    """POST /api/auth/register request body."""

    email: EmailStr
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    preferred_language: Language = Language.EN


class LoginRequest(CamelModel):
    """POST /api/auth/login request body."""

    email: EmailStr
    password: str


class UserPublic(CamelModel):
    """A user as exposed to clients. Never carries the password hash."""

    id: uuid.UUID
    email: str
    name: str
    preferred_language: Language
    avatar: str
    created_at: datetime | None = None


class AuthResponse(CamelModel):
    """Register/login response body."""

    token: str
    user: UserPublic


class LanguageUpdateRequest(CamelModel):
    """PUT /api/users/me/language request body."""

    preferred_language: Language
