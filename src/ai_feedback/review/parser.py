# src/ai_feedback/review/parser.py
import re
import logging
from dataclasses import dataclass
from ai_feedback.models.feedback import Category, ParseResult
from .segmenter import segment_bullets


logger = logging.getLogger(__name__)

SECTION_RE = re.compile(r"####\s+([^\n]+)")
NO_ISSUES_MARKERS = ("no issues found", "no problems", "✅")


@dataclass
class Section:
    name: str
    content: str


def normalize_response(response: str) -> str:
    """Unify line endings, strip leading whitespace of every line, trim."""
    text = response.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"^\s+", "", text, flags=re.MULTILINE)
    return text.strip()


def find_sections(text: str) -> list[Section]:
    """Split normalized text on `#### Name` headers."""
    matches = list(SECTION_RE.finditer(text))
    sections = []
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        sections.append(Section(
            name=match.group(1).strip(),
            content=text[match.end():end].strip(),
        ))
    return sections


def _is_no_issues(content: str) -> bool:
    lowered = content.lower()
    return any(marker in lowered for marker in NO_ISSUES_MARKERS)


def _parse(response: str) -> ParseResult:
    result = ParseResult.empty()
    if not response or not response.strip():
        logger.warning("Empty AI response received")
        return result

    sections = find_sections(normalize_response(response))
    logger.debug(f"Found {len(sections)} sections")

    for section in sections:
        category = Category.from_label(section.name)
        if category is None:
            logger.debug(f"Category {section.name!r} not recognized, skipping")
            continue
        if not section.content:
            continue
        if _is_no_issues(section.content):
            logger.debug(f"Category {section.name!r} has no issues")
            continue

        result.root[category] = segment_bullets(section.content)

    return result


def parse_feedback(response: str) -> ParseResult:
    """Parse a ten-section quick review response into a ParseResult.

    Never raises: anything unexpected is logged and an empty result returned.
    """
    try:
        return _parse(response)
    except Exception as e:
        logger.exception(f"Failed to parse AI response: {e}")
        return ParseResult.empty()
