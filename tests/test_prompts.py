import pytest
from ai_feedback.models.feedback import Category
from ai_feedback.models.review import ReviewMode
from ai_feedback.review.fallbacks import REPORT_TIMEOUT_RESPONSE, quick_timeout_response, timeout_response
from ai_feedback.review.parser import parse_feedback
from ai_feedback.review.prompts import (
    TRUNCATION_MARKER,
    build_quick_prompt,
    build_report_prompt,
    build_user_prompt,
    system_prompt,
    truncate,
)


def test_quick_system_prompt_lists_every_section():
    prompt = system_prompt(ReviewMode.QUICK)

    for category in Category:
        assert f"#### {category.value}" in prompt


def test_report_system_prompt_asks_for_scores():
    prompt = system_prompt(ReviewMode.REPORT)

    assert "## Executive Summary" in prompt
    assert "## Learning Resources" in prompt
    assert "score: X/10" in prompt


def test_truncate_short_content_unchanged():
    assert truncate("abc", 10) == "abc"
    assert truncate("a" * 10, 10) == "a" * 10


def test_truncate_marks_cut():
    result = truncate("a" * 20, 10)

    assert result == "a" * 10 + TRUNCATION_MARKER
    assert result.endswith("[Content truncated due to length]")


def test_build_quick_prompt():
    prompt = build_quick_prompt("x = 1", max_chars=2048)

    assert prompt.startswith("Review the following code and categorize the feedback into: Serious Problems")
    assert prompt.endswith("x = 1")


def test_build_quick_prompt_truncates_file():
    prompt = build_quick_prompt("y" * 3000, max_chars=2048)

    assert "y" * 2048 + TRUNCATION_MARKER in prompt
    assert "y" * 2049 not in prompt


def test_build_report_prompt():
    assert build_report_prompt("app.py", "x = 1") == "File: app.py\n\n```\nx = 1\n```"


@pytest.mark.parametrize("mode,prefix", [
    (ReviewMode.QUICK, "Review the following code:"),
    (ReviewMode.REPORT, "Create a comprehensive code review report for the following code:"),
])
def test_build_user_prompt(mode, prefix):
    prompt = build_user_prompt("z" * 50, mode, max_length=20)

    assert prompt.startswith(prefix + "\n\n")
    assert prompt.endswith("z" * 20 + TRUNCATION_MARKER)


def test_quick_timeout_response_parses_to_notice():
    result = parse_feedback(quick_timeout_response())

    assert result.items(Category.SERIOUS_PROBLEMS) == [
        "Request timed out. Please try again with a smaller code sample."
    ]
    assert result.items(Category.EDUCATIONAL_TIPS) == [
        "Try submitting smaller code samples for better performance."
    ]
    assert result.total_items() == 2


def test_timeout_response_per_mode():
    assert timeout_response(ReviewMode.REPORT) == REPORT_TIMEOUT_RESPONSE
    assert timeout_response(ReviewMode.QUICK) == quick_timeout_response()
