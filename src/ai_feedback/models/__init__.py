from .feedback import Category, Severity, FeedbackItem, ParseResult, severity_for
from .review import ReviewMode, OutputFormat, FeedbackReview, ReportOutcome

__all__ = [
    "Category",
    "Severity",
    "FeedbackItem",
    "ParseResult",
    "severity_for",
    "ReviewMode",
    "OutputFormat",
    "FeedbackReview",
    "ReportOutcome",
]
