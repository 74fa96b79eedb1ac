"""LLM provider abstraction and concrete providers.

Use explicit imports so the Gemini SDK is only loaded where it is needed:
    from lingochat.services.llm.base import LLMProvider
    from lingochat.services.llm.gemini import GeminiProvider
"""
