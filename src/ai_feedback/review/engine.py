# src/ai_feedback/review/engine.py
import asyncio
import logging
from pathlib import PurePath
from ai_feedback.config import Settings
from ai_feedback.errors import CompletionTimeout, EmptyFeedbackError, FeedbackError, InputRejected, PdfRenderError
from ai_feedback.models.review import FeedbackReview, OutputFormat, ReportOutcome, ReviewMode
from ai_feedback.providers.base import LLMProvider
from ai_feedback.render.pdf import PdfRenderer
from ai_feedback.render.template import convert_markdown_file
from ai_feedback.storage import ResponseStore
from .fallbacks import timeout_response
from .parser import parse_feedback
from .prompts import build_quick_prompt, build_report_prompt


logger = logging.getLogger(__name__)


class ReviewEngine:
    def __init__(
        self,
        provider: LLMProvider,
        settings: Settings,
        store: ResponseStore,
        pdf_renderer: PdfRenderer | None = None,
    ):
        self.provider = provider
        self.settings = settings
        self.store = store
        self.pdf_renderer = pdf_renderer

    def check_document(self, file_name: str | None) -> str:
        """Reject missing documents and unsupported file types. Returns the extension."""
        if not file_name or not file_name.strip():
            raise InputRejected("No active editor found. Open a file to get feedback on your code.")
        extension = PurePath(file_name).suffix.lower()
        supported = {ext.lower() for ext in self.settings.supported_extensions}
        if extension not in supported:
            raise InputRejected(f"Unsupported file type: {extension or file_name}")
        return extension

    async def _complete(self, prompt: str, mode: ReviewMode) -> tuple[str, bool]:
        """Call the provider; a timeout yields the canned response for the mode."""
        try:
            return await self.provider.complete(prompt, mode), False
        except CompletionTimeout as e:
            logger.warning(f"AI {mode.value} request timed out, using fallback response: {e}")
            return timeout_response(mode), True
        except Exception as e:
            logger.error(f"AI {mode.value} request failed: {e}")
            raise FeedbackError(f"AI request failed: {e}") from e

    async def review_file(self, file_name: str | None, content: str) -> FeedbackReview:
        """Run the ten-section review on one file.

        An all-empty parse is re-requested up to settings.max_retries times.
        """
        self.check_document(file_name)
        if not content or not content.strip():
            raise InputRejected(f"{file_name} is empty; nothing to review.")

        prompt = build_quick_prompt(content, self.settings.max_file_chars)
        max_attempts = 1 + max(self.settings.max_retries, 0)

        for attempt in range(1, max_attempts + 1):
            text, timed_out = await self._complete(prompt, ReviewMode.QUICK)
            response_path = self.store.save_response(
                text, prefix="response-timeout" if timed_out else "response", suffix=".txt"
            )
            result = parse_feedback(text)
            json_path = self.store.save_parse_result(result, response_path)

            if not result.is_empty():
                logger.info(f"Review of {file_name}: {result.total_items()} items after {attempt} attempt(s)")
                return FeedbackReview(
                    file_name=file_name,
                    result=result,
                    response_path=response_path,
                    json_path=json_path,
                    attempts=attempt,
                    timed_out=timed_out,
                )

            logger.warning(f"Empty feedback for {file_name} (attempt {attempt}/{max_attempts})")

        raise EmptyFeedbackError(max_attempts)

    async def generate_report(
        self,
        file_name: str | None,
        content: str,
        output_format: OutputFormat = OutputFormat.HTML,
    ) -> ReportOutcome:
        """Produce the scored report as HTML, or PDF when requested.

        Each failing stage falls back to the artifact of the stage before it.
        """
        self.check_document(file_name)
        if not content or not content.strip():
            raise InputRejected(f"{file_name} is empty; nothing to review.")

        text, timed_out = await self._complete(build_report_prompt(file_name, content), ReviewMode.REPORT)
        markdown_path = self.store.save_response(
            text, prefix="report-response-timeout" if timed_out else "report-response", suffix=".md"
        )

        conversion = convert_markdown_file(markdown_path, self.settings)
        warnings = list(conversion.warnings)
        path = conversion.path

        if output_format == OutputFormat.PDF:
            if self.pdf_renderer is None:
                warnings.append("PDF rendering is not configured; opening the HTML report instead")
            else:
                try:
                    # the converter is a blocking subprocess
                    path = await asyncio.to_thread(self.pdf_renderer.render, conversion.path)
                except PdfRenderError as e:
                    logger.error(f"PDF rendering failed for {conversion.path}: {e}")
                    warnings.append(f"PDF conversion failed ({e}); opening {conversion.path.name} instead")

        return ReportOutcome(
            path=path,
            markdown_path=markdown_path,
            output_format=output_format,
            timed_out=timed_out,
            warnings=warnings,
        )
