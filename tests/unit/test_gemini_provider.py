"""Unit tests for GeminiProvider with the SDK patched out."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from lingochat.services.llm.gemini import GeminiProvider


def _response(text: str | None = "வணக்கம்", raise_on_text: bool = False) -> MagicMock:
    response = MagicMock()
    if raise_on_text:
        type(response).text = property(lambda self: (_ for _ in ()).throw(ValueError("blocked")))
        response.candidates = []
    else:
        response.text = text
    response.usage_metadata = MagicMock(prompt_token_count=12, candidates_token_count=3)
    return response


@pytest.mark.asyncio
class TestGeminiProvider:
    async def test_generate_returns_text_and_usage(self) -> None:
        with patch("lingochat.services.llm.gemini.genai") as genai:
            model = genai.GenerativeModel.return_value
            model.generate_content_async = AsyncMock(return_value=_response())

            provider = GeminiProvider(api_key="k", model="gemini-test", timeout_seconds=5)
            result = await provider.generate("Translate hello", system_prompt="")

        assert result.text == "வணக்கம்"
        assert result.input_tokens == 12
        assert result.output_tokens == 3
        genai.configure.assert_called_once_with(api_key="k")
        _, kwargs = model.generate_content_async.call_args
        assert kwargs["request_options"] == {"timeout": 5}

    async def test_blocked_response_yields_empty_text(self) -> None:
        with patch("lingochat.services.llm.gemini.genai") as genai:
            model = genai.GenerativeModel.return_value
            model.generate_content_async = AsyncMock(
                return_value=_response(raise_on_text=True)
            )

            provider = GeminiProvider(api_key="k")
            result = await provider.generate("Translate hello", system_prompt="")

        assert result.text == ""

    async def test_sdk_error_becomes_runtime_error(self) -> None:
        with patch("lingochat.services.llm.gemini.genai") as genai:
            model = genai.GenerativeModel.return_value
            model.generate_content_async = AsyncMock(side_effect=TimeoutError("deadline"))

            provider = GeminiProvider(api_key="k")
            with pytest.raises(RuntimeError, match="Gemini generate failed"):
                await provider.generate("Translate hello", system_prompt="")
