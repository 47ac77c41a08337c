# src/ai_feedback/providers/gemini.py
import asyncio
import httpx
from ai_feedback.config import Settings
from ai_feedback.errors import CompletionTimeout
from ai_feedback.models.review import ReviewMode
from ai_feedback.review.prompts import build_user_prompt, system_prompt
from .base import LLMProvider, EMPTY_RESPONSE


class GeminiProvider(LLMProvider):
    API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

    def __init__(self, api_key: str, settings: Settings):
        self.api_key = api_key
        self.settings = settings

    async def complete(self, prompt: str, mode: ReviewMode) -> str:
        if mode == ReviewMode.REPORT:
            max_length, timeout = self.settings.report_max_prompt, self.settings.report_timeout
        else:
            max_length, timeout = self.settings.quick_max_prompt, self.settings.quick_timeout

        url = self.API_URL.format(model=self.settings.gemini_model)
        try:
            async with httpx.AsyncClient() as client:
                response = await asyncio.wait_for(
                    client.post(
                        f"{url}?key={self.api_key}",
                        json={
                            "systemInstruction": {"parts": [{"text": system_prompt(mode)}]},
                            "contents": [{
                                "parts": [{"text": build_user_prompt(prompt, mode, max_length)}]
                            }],
                        },
                        timeout=timeout,
                    ),
                    timeout=timeout,
                )
                response.raise_for_status()
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise CompletionTimeout(f"Request timed out after {timeout:g} seconds")

        data = response.json()
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"] or EMPTY_RESPONSE
        except (KeyError, IndexError):
            return EMPTY_RESPONSE
