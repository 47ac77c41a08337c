# src/ai_feedback/models/feedback.py
import json
import logging
from enum import Enum
from typing import Any
from pydantic import BaseModel, RootModel, model_validator


logger = logging.getLogger(__name__)


class Category(str, Enum):
    SERIOUS_PROBLEMS = "Serious Problems"
    WARNINGS = "Warnings"
    REFACTORING_SUGGESTIONS = "Refactoring Suggestions"
    CODING_CONVENTIONS = "Coding Conventions"
    PERFORMANCE_OPTIMIZATION = "Performance Optimization"
    SECURITY_ISSUES = "Security Issues"
    BEST_PRACTICES = "Best Practices"
    READABILITY = "Readability and Maintainability"
    CODE_SMELLS = "Code Smells"
    EDUCATIONAL_TIPS = "Educational Tips"

    @classmethod
    def from_label(cls, label: str) -> "Category | None":
        """Exact, case-sensitive lookup after trimming."""
        try:
            return cls(label.strip())
        except ValueError:
            return None


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


CATEGORY_SEVERITY = {
    Category.SERIOUS_PROBLEMS: Severity.ERROR,
    Category.WARNINGS: Severity.WARNING,
    Category.SECURITY_ISSUES: Severity.WARNING,
}


def severity_for(category: Category) -> Severity:
    return CATEGORY_SEVERITY.get(category, Severity.INFO)


class FeedbackItem(BaseModel):
    category: Category
    content: str
    severity: Severity | None = None

    @model_validator(mode="after")
    def fill_severity(self):
        if self.severity is None:
            self.severity = severity_for(self.category)
        return self


class ParseResult(RootModel[dict[Category, list[str]]]):
    """Category -> ordered bullet strings. All ten categories are always present."""

    @model_validator(mode="before")
    @classmethod
    def sanitize(cls, data: Any) -> dict[Category, list[str]]:
        if not isinstance(data, dict):
            data = {}
        result: dict[Category, list[str]] = {}
        for category in Category:
            values = data.get(category)
            if values is None:
                values = data.get(category.value)
            if not isinstance(values, list):
                values = []
            result[category] = [v for v in values if isinstance(v, str) and v.strip()]
        return result

    @classmethod
    def empty(cls) -> "ParseResult":
        return cls({})

    @classmethod
    def from_json(cls, text: str) -> "ParseResult":
        """Load a persisted result, dropping anything malformed instead of failing."""
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Invalid feedback JSON, using empty result: {e}")
            return cls.empty()
        return cls(data)

    def items(self, category: Category) -> list[str]:
        return self.root[category]

    def is_empty(self) -> bool:
        return self.total_items() == 0

    def total_items(self) -> int:
        return sum(len(values) for values in self.root.values())

    def feedback_items(self) -> list[FeedbackItem]:
        return [
            FeedbackItem(category=category, content=content)
            for category, values in self.root.items()
            for content in values
        ]

    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode="json"), indent=2, ensure_ascii=False)
