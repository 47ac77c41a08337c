# tests/unit/test_parser.py
import pytest
from ai_feedback.models.feedback import Category, ParseResult
from ai_feedback.review.parser import find_sections, normalize_response, parse_feedback


SAMPLE_RESPONSE = """#### Serious Problems
1. SQL query built with string concatenation
```python
cursor.execute("SELECT * FROM users WHERE id = " + user_id)
```
2. Unhandled exception in the request loop

#### Warnings
No issues found.

#### Refactoring Suggestions
- Extract the retry loop into a helper

#### Coding Conventions
No issues found.

#### Performance Optimization
No problems detected.

#### Security Issues
- Secrets are logged at debug level

#### Best Practices
✅ Looks good

#### Readability and Maintainability
* Function `process` is 200 lines long
* Magic numbers in timeout handling

#### Code Smells
No issues found.

#### Educational Tips
- Use parameterized queries to avoid injection
"""


def test_parse_returns_all_categories():
    result = parse_feedback(SAMPLE_RESPONSE)

    assert list(result.root.keys()) == list(Category)
    assert all(isinstance(v, list) for v in result.root.values())


def test_parse_extracts_bullets_with_code():
    result = parse_feedback(SAMPLE_RESPONSE)

    serious = result.items(Category.SERIOUS_PROBLEMS)
    assert len(serious) == 2
    assert serious[0].startswith("SQL query built with string concatenation\n```python\n")
    assert serious[0].endswith("\n```")
    assert serious[1] == "Unhandled exception in the request loop"


def test_parse_no_issue_phrases_leave_category_empty():
    result = parse_feedback(SAMPLE_RESPONSE)

    assert result.items(Category.WARNINGS) == []
    assert result.items(Category.PERFORMANCE_OPTIMIZATION) == []
    assert result.items(Category.BEST_PRACTICES) == []


def test_parse_other_categories():
    result = parse_feedback(SAMPLE_RESPONSE)

    assert result.items(Category.READABILITY) == [
        "Function `process` is 200 lines long",
        "Magic numbers in timeout handling",
    ]
    assert result.items(Category.EDUCATIONAL_TIPS) == ["Use parameterized queries to avoid injection"]
    assert result.total_items() == 7


def test_no_issues_found_section_is_empty_not_a_bullet():
    result = parse_feedback("#### Warnings\nNo issues found.")
    assert result.items(Category.WARNINGS) == []


def test_unknown_sections_are_dropped():
    result = parse_feedback("#### Summary\n- Nice code\n\n#### Warnings\n- Shadowed builtin `id`")

    assert len(result.root) == 10
    assert result.items(Category.WARNINGS) == ["Shadowed builtin `id`"]
    assert result.total_items() == 1


def test_category_match_is_exact():
    result = parse_feedback("#### warnings\n- lower case\n#### Warning\n- singular")
    assert result.is_empty()


def test_repeated_header_last_wins():
    result = parse_feedback("#### Warnings\n- first\n#### Warnings\n- second")
    assert result.items(Category.WARNINGS) == ["second"]


@pytest.mark.parametrize("response", ["", "   ", "\n\n"])
def test_empty_input_yields_empty_result(response):
    result = parse_feedback(response)

    assert result.is_empty()
    assert len(result.root) == 10


def test_indented_and_crlf_response():
    response = "    #### Code Smells\r\n        - Duplicate code in handlers\r\n    #### Warnings\r\n    - Unused import"

    result = parse_feedback(response)

    assert result.items(Category.CODE_SMELLS) == ["Duplicate code in handlers"]
    assert result.items(Category.WARNINGS) == ["Unused import"]


def test_reparsing_serialized_json_does_not_crash():
    result = parse_feedback(SAMPLE_RESPONSE)

    reparsed = parse_feedback(result.to_json())

    assert isinstance(reparsed, ParseResult)
    assert reparsed.is_empty()


def test_normalize_response():
    assert normalize_response("  a\r\n   b\r\n") == "a\nb"


def test_find_sections_spans():
    sections = find_sections("#### One\nfirst\n#### Two\nsecond\nmore")

    assert [s.name for s in sections] == ["One", "Two"]
    assert sections[0].content == "first"
    assert sections[1].content == "second\nmore"
