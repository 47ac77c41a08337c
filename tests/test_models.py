# tests/test_models.py
import json
import pytest
from pydantic import ValidationError
from ai_feedback.models.feedback import Category, FeedbackItem, ParseResult, Severity, severity_for
from ai_feedback.models.review import FeedbackReview, OutputFormat


def test_category_labels():
    assert len(Category) == 10
    assert Category.READABILITY.value == "Readability and Maintainability"
    assert Category.from_label("  Code Smells ") == Category.CODE_SMELLS


def test_category_from_label_is_exact():
    assert Category.from_label("code smells") is None
    assert Category.from_label("Code Smell") is None
    assert Category.from_label("") is None


def test_severity_mapping():
    assert severity_for(Category.SERIOUS_PROBLEMS) == Severity.ERROR
    assert severity_for(Category.WARNINGS) == Severity.WARNING
    assert severity_for(Category.SECURITY_ISSUES) == Severity.WARNING
    assert severity_for(Category.BEST_PRACTICES) == Severity.INFO


def test_feedback_item_fills_severity():
    item = FeedbackItem(category=Category.SERIOUS_PROBLEMS, content="Null dereference")
    assert item.severity == Severity.ERROR

    explicit = FeedbackItem(category=Category.SERIOUS_PROBLEMS, content="x", severity=Severity.INFO)
    assert explicit.severity == Severity.INFO


def test_feedback_item_rejects_unknown_category():
    with pytest.raises(ValidationError):
        FeedbackItem(category="Nitpicks", content="x")


def test_parse_result_always_has_all_categories():
    result = ParseResult.empty()

    assert list(result.root) == list(Category)
    assert result.is_empty()
    assert result.total_items() == 0


def test_parse_result_accepts_labels_as_keys():
    result = ParseResult({"Warnings": ["a", "b"], Category.CODE_SMELLS: ["c"]})

    assert result.items(Category.WARNINGS) == ["a", "b"]
    assert result.items(Category.CODE_SMELLS) == ["c"]
    assert result.total_items() == 3


def test_parse_result_feedback_items_in_category_order():
    result = ParseResult({Category.EDUCATIONAL_TIPS: ["tip"], Category.SERIOUS_PROBLEMS: ["bug"]})

    items = result.feedback_items()

    assert [(i.category, i.content) for i in items] == [
        (Category.SERIOUS_PROBLEMS, "bug"),
        (Category.EDUCATIONAL_TIPS, "tip"),
    ]


def test_parse_result_json_uses_labels():
    result = ParseResult({Category.WARNINGS: ["ünïcode"]})

    data = json.loads(result.to_json())

    assert data["Warnings"] == ["ünïcode"]
    assert "ünïcode" in result.to_json()
    assert ParseResult.from_json(result.to_json()) == result


def test_parse_result_from_json_non_object():
    assert ParseResult.from_json("[1, 2, 3]").is_empty()
    assert ParseResult.from_json("null").is_empty()


def test_feedback_review_model(tmp_path):
    review = FeedbackReview(
        file_name="app.py",
        result=ParseResult.empty(),
        response_path=tmp_path / "r.txt",
        json_path=tmp_path / "r.json",
    )

    assert review.attempts == 1
    assert review.timed_out is False
    assert OutputFormat("pdf") == OutputFormat.PDF
