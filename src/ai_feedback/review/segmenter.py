# src/ai_feedback/review/segmenter.py
import re
from collections.abc import Iterator


FENCE = "```"
BULLET_RE = re.compile(r"^(\d+\.|[-*•])\s+(.+)$")


def iter_bullets(content: str) -> Iterator[str]:
    """Split one section's text into bullet points.

    Fenced code blocks are opaque: their lines (fence markers included) are
    appended to the open bullet and never start a new one.
    """
    current: str | None = None
    in_fence = False

    for raw_line in content.split("\n"):
        line = raw_line.strip()

        if line.startswith(FENCE):
            in_fence = not in_fence
            if current is not None:
                current += "\n" + line
            continue

        if in_fence:
            if current is not None:
                current += "\n" + line
            continue

        match = BULLET_RE.match(line)
        if match:
            if current is not None:
                yield current
            current = match.group(2)
        elif current is not None and line:
            current += "\n" + line

    if current is not None:
        yield current


def segment_bullets(content: str) -> list[str]:
    return list(iter_bullets(content))
