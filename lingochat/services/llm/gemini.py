"""Gemini text generation over the google-generativeai SDK.

Each call is bounded by ``timeout_seconds``; any SDK failure surfaces as
RuntimeError so the translator can degrade to the original text.
"""

from typing import Any

import google.generativeai as genai
import structlog

from lingochat.services.llm.base import LLMProvider, LLMResponse

logger = structlog.get_logger(__name__)


def _response_text(response: Any) -> str:
    """Text of a Gemini response, or "" when it carries none.

    ``response.text`` raises for safety-blocked or empty candidates, so fall
    back to joining the first candidate's text parts.
    """
    try:
        return response.text or ""
    except (ValueError, AttributeError):
        pass
    if not response.candidates:
        return ""
    try:
        parts = response.candidates[0].content.parts
    except (IndexError, AttributeError):
        return ""
    return "".join(getattr(part, "text", None) or "" for part in parts)


class GeminiProvider(LLMProvider):
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout_seconds: float = 10.0,
    ) -> None:
        genai.configure(api_key=api_key)
        self._model_name = model
        self._timeout_seconds = timeout_seconds
        logger.info("gemini_provider_initialized", model=model, timeout_seconds=timeout_seconds)

    async def generate(
        self,
        prompt: str,
        system_prompt: str,
        max_tokens: int = 1000,
        temperature: float = 0.3,
    ) -> LLMResponse:
        model = genai.GenerativeModel(
            model_name=self._model_name,
            system_instruction=system_prompt or None,
        )
        try:
            response = await model.generate_content_async(
                prompt,
                generation_config=genai.GenerationConfig(
                    max_output_tokens=max_tokens,
                    temperature=temperature,
                ),
                request_options={"timeout": self._timeout_seconds},
            )
        except Exception as e:
            logger.error(
                "gemini_generate_failed",
                model=self._model_name,
                prompt_len=len(prompt),
                error=str(e),
            )
            raise RuntimeError(f"Gemini generate failed: {e}") from e

        text = _response_text(response)
        if not text:
            logger.warning("gemini_empty_response", model=self._model_name, prompt_len=len(prompt))

        usage = response.usage_metadata
        return LLMResponse(
            text=text,
            input_tokens=getattr(usage, "prompt_token_count", 0) or 0,
            output_tokens=getattr(usage, "candidates_token_count", 0) or 0,
        )
