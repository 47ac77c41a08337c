# src/ai_feedback/providers/base.py
from abc import ABC, abstractmethod
from ai_feedback.models.review import ReviewMode


EMPTY_RESPONSE = "No response from AI."


class LLMProvider(ABC):
    @abstractmethod
    async def complete(self, prompt: str, mode: ReviewMode) -> str:
        """Send prompt to LLM and return the raw response text.

        Raises CompletionTimeout when the mode's deadline expires.
        """
        pass
