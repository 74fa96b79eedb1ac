"""Unit tests for wire schemas: camelCase aliases and ingress validation."""

from __future__ import annotations

import uuid

import pytest
from pydantic import ValidationError

from lingochat.schemas.message import InboundMessage, MessagePayload
from lingochat.services.language.detector import Language


class TestInboundMessage:
    def test_accepts_camel_case_payload(self) -> None:
        sender, room = uuid.uuid4(), uuid.uuid4()
        msg = InboundMessage.model_validate(
            {
                "text": "hello",
                "senderId": str(sender),
                "roomId": str(room),
                "timestamp": "2026-10-19T10:00:00Z",
            }
        )
        assert msg.sender_id == sender
        assert msg.room_id == room
        assert msg.timestamp is not None

    def test_timestamp_is_optional(self) -> None:
        msg = InboundMessage.model_validate(
            {"text": "hi", "senderId": str(uuid.uuid4()), "roomId": str(uuid.uuid4())}
        )
        assert msg.timestamp is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"senderId": str(uuid.uuid4()), "roomId": str(uuid.uuid4())},
            {"text": "", "senderId": str(uuid.uuid4()), "roomId": str(uuid.uuid4())},
            {"text": "   ", "senderId": str(uuid.uuid4()), "roomId": str(uuid.uuid4())},
            {"text": "hi", "senderId": "not-a-uuid", "roomId": str(uuid.uuid4())},
            {"text": "hi", "senderId": str(uuid.uuid4())},
            "just a string",
            None,
        ],
    )
    def test_malformed_payloads_rejected(self, payload: object) -> None:
        with pytest.raises(ValidationError):
            InboundMessage.model_validate(payload)


class TestMessagePayload:
    def test_wire_form_uses_camel_case(self) -> None:
        payload = MessagePayload(
            id=uuid.uuid4(),
            room_id=uuid.uuid4(),
            sender_id=uuid.uuid4(),
            text="hello",
            original_text="hello",
            translations={"en": "hello", "ta": "வணக்கம்"},
            detected_language=Language.EN,
            is_translated=True,
            timestamp="2026-10-19T10:00:00Z",
        )
        wire = payload.to_wire()

        assert wire["originalText"] == "hello"
        assert wire["translations"] == {"en": "hello", "ta": "வணக்கம்"}
        assert wire["isTranslated"] is True
        assert wire["detectedLanguage"] == "en"
        assert isinstance(wire["roomId"], str)
