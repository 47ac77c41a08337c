# src/ai_feedback/providers/__init__.py
from .base import LLMProvider
from .gemini import GeminiProvider
from .openai_chat import OpenAIProvider
from ai_feedback.config import Settings

__all__ = ["LLMProvider", "GeminiProvider", "OpenAIProvider", "get_provider"]


def get_provider(settings: Settings) -> LLMProvider | None:
    """Get LLM provider based on settings."""
    if settings.default_provider == "openai" and settings.openai_api_key:
        return OpenAIProvider(api_key=settings.openai_api_key, settings=settings)
    elif settings.default_provider == "gemini" and settings.gemini_api_key:
        return GeminiProvider(api_key=settings.gemini_api_key, settings=settings)
    return None
