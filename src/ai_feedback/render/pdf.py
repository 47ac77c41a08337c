# src/ai_feedback/render/pdf.py
import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from ai_feedback.errors import PdfRenderError


logger = logging.getLogger(__name__)


class PdfRenderer(ABC):
    @abstractmethod
    def render(self, source: Path) -> Path:
        """Render an HTML (or markdown) file to PDF and return the PDF path."""
        pass


class CommandPdfRenderer(PdfRenderer):
    """Runs an external converter: `<command> <source> <target.pdf>`."""

    def __init__(self, command: str = "wkhtmltopdf", timeout: float = 60.0):
        self.command = shlex.split(command)
        self.timeout = timeout

    def render(self, source: Path) -> Path:
        target = source.with_suffix(".pdf")
        try:
            completed = subprocess.run(
                [*self.command, str(source), str(target)],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise PdfRenderError(f"PDF converter not found: {self.command[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise PdfRenderError(f"PDF conversion timed out after {self.timeout:g} seconds") from e

        if completed.returncode != 0 or not target.exists():
            raise PdfRenderError(f"PDF conversion failed: {completed.stderr.strip()}")

        logger.info(f"PDF file created: {target}")
        return target
