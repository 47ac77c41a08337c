# src/ai_feedback/views.py
import re
from pydantic import BaseModel
from ai_feedback.models.feedback import Category, FeedbackItem, ParseResult, Severity, severity_for


NO_ISSUES_MESSAGE = "No issues found."
LABEL_MAX_LENGTH = 80

CODE_SEGMENT_RE = re.compile(r"```(\w*)\n?(.*?)```", re.DOTALL)


class ItemNode(BaseModel):
    index: int
    label: str
    content: str


class CategoryNode(BaseModel):
    category: Category
    severity: Severity
    items: list[ItemNode]
    message: str | None = None


class ItemSegment(BaseModel):
    kind: str  # "text" or "code"
    text: str
    language: str | None = None


def item_label(content: str) -> str:
    """First line of an item, shortened for the tree."""
    first_line = content.strip().split("\n", 1)[0].strip()
    if len(first_line) > LABEL_MAX_LENGTH:
        return first_line[:LABEL_MAX_LENGTH - 1].rstrip() + "…"
    return first_line


def build_feedback_tree(result: ParseResult) -> list[CategoryNode]:
    nodes = []
    for category in Category:
        items = [
            ItemNode(index=i, label=item_label(content), content=content)
            for i, content in enumerate(result.items(category))
        ]
        nodes.append(CategoryNode(
            category=category,
            severity=severity_for(category),
            items=items,
            message=None if items else NO_ISSUES_MESSAGE,
        ))
    return nodes


def item_detail(result: ParseResult, category: Category, index: int) -> FeedbackItem:
    """Detail panel payload. Raises IndexError for an unknown item."""
    return FeedbackItem(category=category, content=result.items(category)[index])


def split_item_segments(text: str) -> list[ItemSegment]:
    """Split an item into prose and fenced code for the detail panel."""
    segments = []
    position = 0
    for match in CODE_SEGMENT_RE.finditer(text):
        before = text[position:match.start()].strip()
        if before:
            segments.append(ItemSegment(kind="text", text=before))
        segments.append(ItemSegment(
            kind="code",
            text=match.group(2).strip(),
            language=match.group(1) or "text",
        ))
        position = match.end()

    rest = text[position:].strip()
    if rest:
        segments.append(ItemSegment(kind="text", text=rest))
    return segments
