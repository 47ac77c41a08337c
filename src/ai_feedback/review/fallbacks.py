# src/ai_feedback/review/fallbacks.py
from ai_feedback.models.feedback import Category
from ai_feedback.models.review import ReviewMode


QUICK_TIMEOUT_NOTICE = "Request timed out. Please try again with a smaller code sample."
QUICK_TIMEOUT_TIP = "Try submitting smaller code samples for better performance."

REPORT_TIMEOUT_RESPONSE = (
    "# Report Generation Timed Out\n\n"
    "The report generation process took too long and timed out. This might be due to "
    "high server load or complexity of the code. Please try again later with a smaller code sample."
)


def quick_timeout_response() -> str:
    """Well-formed ten-section response used when the quick review times out."""
    sections = []
    for category in Category:
        if category == Category.SERIOUS_PROBLEMS:
            body = f"- {QUICK_TIMEOUT_NOTICE}"
        elif category == Category.EDUCATIONAL_TIPS:
            body = f"- {QUICK_TIMEOUT_TIP}"
        else:
            body = "No issues found."
        sections.append(f"#### {category.value}\n{body}")
    return "\n\n".join(sections)


def timeout_response(mode: ReviewMode) -> str:
    if mode == ReviewMode.REPORT:
        return REPORT_TIMEOUT_RESPONSE
    return quick_timeout_response()
