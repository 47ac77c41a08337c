# src/ai_feedback/storage.py
import logging
from datetime import datetime, timezone
from pathlib import Path
from ai_feedback.models.feedback import ParseResult


logger = logging.getLogger(__name__)


class ResponseStore:
    """Raw responses and parsed feedback, kept under one directory."""

    def __init__(self, responses_dir: str | Path):
        self.responses_dir = Path(responses_dir)
        self.responses_dir.mkdir(parents=True, exist_ok=True)

    def timestamped_path(self, prefix: str = "response", suffix: str = ".txt") -> Path:
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace(":", "-")
        path = self.responses_dir / f"{prefix}-{timestamp}{suffix}"
        counter = 1
        while path.exists():
            path = self.responses_dir / f"{prefix}-{timestamp}-{counter}{suffix}"
            counter += 1
        return path

    def save_text(self, content: str, path: Path) -> Path:
        path.write_text(content, encoding="utf-8")
        return path

    def save_response(self, content: str, prefix: str = "response", suffix: str = ".txt") -> Path:
        path = self.save_text(content.strip(), self.timestamped_path(prefix, suffix))
        logger.info(f"AI response saved to: {path}")
        return path

    def save_parse_result(self, result: ParseResult, response_path: Path) -> Path:
        return self.save_text(result.to_json(), response_path.with_suffix(".json"))

    def load_parse_result(self, path: Path) -> ParseResult:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not read feedback file {path}: {e}")
            return ParseResult.empty()
        return ParseResult.from_json(text)
