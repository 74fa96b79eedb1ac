"""Auto-translate: detect the source language, translate only when needed."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from lingochat.services.language.detector import Language, detect_language
from lingochat.services.language.translator import Translator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TranslationResult:
    translated_text: str
    detected_language: Language
    is_translated: bool


class AutoTranslator:
    """Composes the detector with a translation strategy.

    ``auto_translate`` never raises. ``is_translated`` is true only when the
    returned text differs from the input, so a silent translation failure
    that falls back to the original text reports ``False``.
    """

    def __init__(self, translator: Translator) -> None:
        self._translator = translator

    async def auto_translate(self, text: str, target: Language) -> TranslationResult:
        detected = detect_language(text)
        if detected == target:
            return TranslationResult(
                translated_text=text,
                detected_language=detected,
                is_translated=False,
            )

        try:
            result = await self._translator.translate(text, detected, target)
        except Exception as e:
            logger.error(
                "auto_translate_failed",
                source=detected.value,
                target=Language(target).value,
                error=str(e),
            )
            result = ""

        translated_text = result or text
        return TranslationResult(
            translated_text=translated_text,
            detected_language=detected,
            is_translated=translated_text != text,
        )
