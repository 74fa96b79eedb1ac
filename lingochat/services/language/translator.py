"""Translation strategies behind a single ``Translator`` capability.

Strategies:
  - LookupTranslator: static phrase table, bracketed marker on a miss.
  - LLMTranslator: prompt an LLMProvider (Gemini); empty string on failure.
  - CachingTranslator: Redis-backed cache in front of another strategy.

``build_translator`` picks the strategy from settings. Callers go through
``AutoTranslator`` and never choose a strategy themselves.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod

import structlog

from lingochat.core.config import Settings
from lingochat.core.exceptions import RedisConnectionError
from lingochat.db.redis import RedisClient
from lingochat.services.language.detector import Language
from lingochat.services.language.phrases import DEFAULT_PHRASE_TABLE, PhraseTable
from lingochat.services.llm.base import LLMProvider

logger = structlog.get_logger(__name__)


class Translator(ABC):
    """Translate text between the two supported languages."""

    async def translate(self, text: str, source: Language, target: Language) -> str:
        """Return ``text`` translated from ``source`` to ``target``.

        Identical source and target is a caller error; the text is returned
        unchanged rather than raising.
        """
        if source == target:
            return text
        return await self._translate(text, Language(source), Language(target))

    @abstractmethod
    async def _translate(self, text: str, source: Language, target: Language) -> str:
        ...


class LookupTranslator(Translator):
    """Exact-phrase dictionary translation.

    A miss returns the original text wrapped in a marker in the target
    language, never an error.
    """

    def __init__(self, table: PhraseTable = DEFAULT_PHRASE_TABLE) -> None:
        self._table = table

    async def _translate(self, text: str, source: Language, target: Language) -> str:
        if target is Language.TA:
            return self._table.en_to_ta.get(text.lower()) or f"[தமிழில்: {text}]"
        return self._table.ta_to_en.get(text) or f"[Translated: {text}]"


_PROMPT_TEMPLATE = (
    "Translate the following text into {language} while preserving its "
    "original tone, context, and meaning:\n"
    "\n"
    'Text: "{text}"\n'
    "\n"
    "Provide only the translated text in the response."
)


def build_translation_prompt(text: str, target: Language) -> str:
    return _PROMPT_TEMPLATE.format(language=target.display_name, text=text)


class LLMTranslator(Translator):
    """Delegates translation to a generative model.

    Any provider failure is logged and reported as an empty string; the
    orchestrator falls back to the original text.
    """

    def __init__(self, llm: LLMProvider, max_tokens: int = 1000) -> None:
        self._llm = llm
        self._max_tokens = max_tokens

    async def _translate(self, text: str, source: Language, target: Language) -> str:
        prompt = build_translation_prompt(text, target)
        try:
            response = await self._llm.generate(
                prompt=prompt,
                system_prompt="",
                max_tokens=self._max_tokens,
            )
        except Exception as e:
            logger.error(
                "llm_translate_failed",
                source=source.value,
                target=target.value,
                text_len=len(text),
                error=str(e),
            )
            return ""
        return response.text or ""


class CachingTranslator(Translator):
    """Caches non-empty translations from ``inner`` in Redis.

    Redis being unavailable only costs a cache miss.
    """

    def __init__(self, inner: Translator, redis: RedisClient, ttl_seconds: int) -> None:
        self._inner = inner
        self._redis = redis
        self._ttl_seconds = ttl_seconds

    @staticmethod
    def cache_key(text: str, source: Language, target: Language) -> str:
        digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
        return f"translation:{source.value}:{target.value}:{digest}"

    async def _translate(self, text: str, source: Language, target: Language) -> str:
        key = self.cache_key(text, source, target)
        try:
            cached = await self._redis.get(key)
        except RedisConnectionError:
            logger.warning("translation_cache_read_skipped", key=key)
            cached = None
        if cached is not None:
            logger.debug("translation_cache_hit", key=key)
            return cached

        result = await self._inner.translate(text, source, target)
        if result:
            try:
                await self._redis.set_with_ttl(key, result, self._ttl_seconds)
            except RedisConnectionError:
                logger.warning("translation_cache_write_skipped", key=key)
        return result


def build_translator(
    settings: Settings,
    llm: LLMProvider | None = None,
    redis: RedisClient | None = None,
) -> Translator:
    """Select the translation strategy configured in ``settings``."""
    if settings.translator_backend == "llm":
        if llm is None:
            raise ValueError("translator_backend='llm' requires an LLM provider")
        translator: Translator = LLMTranslator(llm)
        if settings.translation_cache_enabled and redis is not None:
            translator = CachingTranslator(
                translator, redis, settings.translation_cache_ttl_seconds
            )
        logger.info(
            "translator_selected",
            backend="llm",
            cached=isinstance(translator, CachingTranslator),
        )
        return translator

    logger.info("translator_selected", backend="lookup")
    return LookupTranslator(DEFAULT_PHRASE_TABLE)
