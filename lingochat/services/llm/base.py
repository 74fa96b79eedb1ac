"""Text-generation provider interface used by the LLM translator.

Translation code depends on ``LLMProvider`` only; the concrete provider is
built once in the FastAPI lifespan when ``TRANSLATOR_BACKEND=llm``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class LLMResponse:
    """Generated text plus token accounting."""

    text: str
    input_tokens: int = 0
    output_tokens: int = 0


class LLMProvider(ABC):
    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: str,
        max_tokens: int = 1000,
        temperature: float = 0.3,
    ) -> LLMResponse:
        """Return one complete completion for ``prompt``.

        An empty ``system_prompt`` means no system instruction. ``text`` may be
        empty when the model produced nothing usable.

        Raises:
            RuntimeError: on timeout or any API error.
        """
        ...
