# tests/unit/test_segmenter.py
import pytest
from ai_feedback.review.segmenter import iter_bullets, segment_bullets


def test_numbered_bullets_with_trailing_code_block():
    content = "1. Use const instead of var\n2. Avoid nested callbacks\n```js\nconst x = 1;\n```"

    bullets = segment_bullets(content)

    assert bullets == [
        "Use const instead of var",
        "Avoid nested callbacks\n```js\nconst x = 1;\n```",
    ]


def test_bullet_markers_inside_fence_do_not_start_bullets():
    content = "- Prefer comprehensions\n```python\n- not a bullet\n1. nor this\n* nor this\n```\n- Second"

    bullets = segment_bullets(content)

    assert len(bullets) == 2
    assert bullets[0] == "Prefer comprehensions\n```python\n- not a bullet\n1. nor this\n* nor this\n```"
    assert bullets[1] == "Second"


@pytest.mark.parametrize("marker", ["-", "*", "•", "1.", "12."])
def test_accepted_markers(marker):
    assert segment_bullets(f"{marker} Item text") == ["Item text"]


def test_continuation_lines_and_blank_lines():
    content = "- First point\nmore detail\n\n\n- Second point"

    assert segment_bullets(content) == ["First point\nmore detail", "Second point"]


def test_text_before_first_bullet_is_dropped():
    assert segment_bullets("Intro sentence\n- Item") == ["Item"]


def test_no_bullets_yields_nothing():
    assert segment_bullets("Just a paragraph without markers.") == []


def test_empty_input():
    assert segment_bullets("") == []


def test_marker_without_content_is_continuation():
    assert segment_bullets("- Item\n-") == ["Item\n-"]


def test_iteration_is_restartable():
    content = "- a\n- b"
    assert list(iter_bullets(content)) == list(iter_bullets(content)) == ["a", "b"]
