"""Message ingestion: translate into both languages, persist, broadcast.

MessageIngestionPipeline.ingest() does exactly these things in order:
1. Auto-translate the text to English
2. Auto-translate the text to Tamil (after step 1 completes)
3. Persist one Message carrying the original text and both variants
4. Re-read it with the sender loaded for display metadata
5. Broadcast ``message:received`` to every connection joined to the room

Steps 3-5 are best effort: a failure is logged and the message is dropped.
The sender gets no error and nothing is retried.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from lingochat.db.database import session_scope
from lingochat.models.message import Message
from lingochat.schemas.message import InboundMessage, MessagePayload
from lingochat.schemas.realtime import MESSAGE_RECEIVED
from lingochat.services.chat.broadcaster import RoomBroadcaster
from lingochat.services.language.detector import Language
from lingochat.services.language.orchestrator import AutoTranslator

logger = structlog.get_logger(__name__)


class MessageIngestionPipeline:
    """Turns one inbound chat message into a persisted, broadcast record."""

    def __init__(
        self,
        translator: AutoTranslator,
        session_factory: async_sessionmaker[AsyncSession],
        broadcaster: RoomBroadcaster,
    ) -> None:
        self._translator = translator
        self._session_factory = session_factory
        self._broadcaster = broadcaster

    async def ingest(self, event: InboundMessage) -> MessagePayload | None:
        """Process one ``message:send`` event.

        Returns the broadcast payload, or None if persistence or broadcast
        failed.
        """
        en = await self._translator.auto_translate(event.text, Language.EN)
        ta = await self._translator.auto_translate(event.text, Language.TA)

        try:
            async with session_scope(self._session_factory) as db:
                message = Message(
                    room_id=event.room_id,
                    sender_id=event.sender_id,
                    # English is the canonical display default.
                    text=en.translated_text,
                    original_text=event.text,
                    translations={
                        Language.EN.value: en.translated_text,
                        Language.TA.value: ta.translated_text,
                    },
                    detected_language=en.detected_language.value,
                    is_translated=en.is_translated or ta.is_translated,
                    timestamp=event.timestamp or datetime.now(timezone.utc),
                )
                db.add(message)
                await db.flush()

                result = await db.execute(
                    select(Message)
                    .options(selectinload(Message.sender))
                    .where(Message.id == message.id)
                    .execution_options(populate_existing=True)
                )
                payload = MessagePayload.model_validate(result.scalar_one())

            delivered = await self._broadcaster.emit_to_room(
                str(event.room_id), MESSAGE_RECEIVED, payload.to_wire()
            )
        except Exception as e:
            logger.error(
                "message_ingest_failed",
                room_id=str(event.room_id),
                sender_id=str(event.sender_id),
                error=str(e),
            )
            return None

        logger.info(
            "message_ingested",
            message_id=str(payload.id),
            room_id=str(event.room_id),
            detected_language=en.detected_language.value,
            is_translated=payload.is_translated,
            delivered=delivered,
        )
        return payload
