# src/ai_feedback/models/review.py
from enum import Enum
from pathlib import Path
from pydantic import BaseModel, Field
from .feedback import ParseResult


class ReviewMode(str, Enum):
    QUICK = "quick"
    REPORT = "report"


class OutputFormat(str, Enum):
    HTML = "html"
    PDF = "pdf"


class FeedbackReview(BaseModel):
    file_name: str
    result: ParseResult
    response_path: Path
    json_path: Path
    attempts: int = 1
    timed_out: bool = False


class ReportOutcome(BaseModel):
    path: Path
    markdown_path: Path
    output_format: OutputFormat
    timed_out: bool = False
    warnings: list[str] = Field(default_factory=list)
