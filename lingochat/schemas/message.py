"""Chat message schemas: inbound ``message:send`` payload and persisted message."""

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from lingochat.schemas.base import CamelModel
from lingochat.services.language.detector import Language


class InboundMessage(CamelModel):
    """Client→server ``message:send`` payload, validated before ingestion."""

    text: str = Field(min_length=1)
    sender_id: uuid.UUID
    room_id: uuid.UUID
    timestamp: datetime | None = None

    @field_validator("text")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("text must not be blank")
        return v


class Translations(CamelModel):
    en: str
    ta: str


class SenderInfo(CamelModel):
    """Display metadata attached to a message for rendering."""

    id: uuid.UUID
    name: str
    avatar: str
    preferred_language: Language


class MessagePayload(CamelModel):
    """A persisted message, as broadcast in ``message:received`` and listed in history."""

    id: uuid.UUID
    room_id: uuid.UUID
    sender_id: uuid.UUID
    sender: SenderInfo | None = None
    text: str
    original_text: str
    translations: Translations
    detected_language: Language
    is_translated: bool
    timestamp: datetime
