# src/ai_feedback/providers/openai_chat.py
import asyncio
import logging
from openai import AsyncOpenAI
from ai_feedback.config import Settings
from ai_feedback.errors import CompletionTimeout
from ai_feedback.models.review import ReviewMode
from ai_feedback.review.prompts import build_user_prompt, system_prompt
from .base import LLMProvider, EMPTY_RESPONSE


logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    def __init__(self, api_key: str, settings: Settings):
        self.settings = settings
        self.client = AsyncOpenAI(api_key=api_key)

    def _limits(self, mode: ReviewMode) -> tuple[str, int, float]:
        if mode == ReviewMode.REPORT:
            return self.settings.report_model, self.settings.report_max_prompt, self.settings.report_timeout
        return self.settings.quick_model, self.settings.quick_max_prompt, self.settings.quick_timeout

    async def complete(self, prompt: str, mode: ReviewMode) -> str:
        model, max_length, timeout = self._limits(mode)

        request = self.client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt(mode)},
                {"role": "user", "content": build_user_prompt(prompt, mode, max_length)},
            ],
        )

        try:
            response = await asyncio.wait_for(request, timeout=timeout)
        except asyncio.TimeoutError:
            raise CompletionTimeout(f"Request timed out after {timeout:g} seconds")

        text = response.choices[0].message.content if response.choices else None
        logger.info(f"OpenAI {mode.value} response length: {len(text or '')} chars")
        return text or EMPTY_RESPONSE
