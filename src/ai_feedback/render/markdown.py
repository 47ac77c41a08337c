# src/ai_feedback/render/markdown.py
"""Markdown report -> HTML fragment.

The passes run in a fixed order. Fenced code is swapped for placeholder tokens
before any text-level pass and swapped back at the very end, so the regex
passes in between never see code.
"""
import html
import logging
import re
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field


logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "CODE_BLOCK_PLACEHOLDER_"

HEADING_LINE_RE = re.compile(r"^#+\s+.*$", re.MULTILINE)
CODE_FENCE_RE = re.compile(r"```(\w*)\n(.*?)```", re.DOTALL)
HEADER_RE = re.compile(r"^(#{1,6})[ \t]+(.*)$", re.MULTILINE)
LIST_ITEM_RE = re.compile(r"^\s*[*-]\s+(.*)$")
NUMBERED_PARAGRAPH_RE = re.compile(r"<p>\s*(\d+)\.\s+(.*?)</p>")
ANY_PLACEHOLDER_RE = re.compile(r"PLACEHOLDER_\d+")

# markdown heading depth -> output heading level
HEADING_LEVELS = {1: 2, 2: 2, 3: 3, 4: 3, 5: 4, 6: 5}

INLINE_RULES: list[tuple[re.Pattern, str]] = [
    # bold before italic so a single marker never eats half of a double one
    (re.compile(r"\*\*(?!\s)(.+?)(?<!\s)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"(?<!\w)__(?!\s)(.+?)(?<!\s)__(?!\w)"), r"<strong>\1</strong>"),
    (re.compile(r"\*(?!\s)(.+?)(?<!\s)\*"), r"<em>\1</em>"),
    (re.compile(r"(?<!\w)_(?!\s)(.+?)(?<!\s)_(?!\w)"), r"<em>\1</em>"),
]
INLINE_CODE_RE = re.compile(r"`([^`]+)`")


@dataclass
class CodeBlock:
    placeholder: str
    language: str
    code: str
    element_id: str
    html: str


@dataclass
class ConversionResult:
    html: str
    code_blocks: list[CodeBlock] = field(default_factory=list)
    unmatched_placeholders: list[str] = field(default_factory=list)


def placeholder_token(index: int) -> str:
    return f"{PLACEHOLDER_PREFIX}{index}"


def trim_boilerplate(content: str) -> str:
    """Drop anything the model wrote before the first heading."""
    match = HEADING_LINE_RE.search(content)
    if match is None:
        return content
    return content[match.start():]


def render_code_block(language: str, code: str, element_id: str) -> str:
    label = (language or "text").upper()
    lines = code.rstrip().lstrip("\n").split("\n")

    line_numbers = "".join(f'<span class="line-number">{i}</span>\n' for i in range(1, len(lines) + 1))
    code_lines = "".join(
        f'<span class="code-line">{html.escape(line, quote=False)}</span>\n' for line in lines
    )

    return (
        '\n<div class="code-block-wrapper">\n'
        '    <div class="code-header">\n'
        f'        <span class="code-language">{label}</span>\n'
        f'        <span class="copy-btn" data-clipboard-target="#{element_id}">Copy</span>\n'
        "    </div>\n"
        f'    <pre class="language-{language or "text"}"><div class="line-numbers">{line_numbers}</div>'
        f'<code id="{element_id}">{code_lines}</code></pre>\n'
        "</div>"
    )


def extract_code_blocks(content: str) -> tuple[str, list[CodeBlock]]:
    """Replace fenced blocks with CODE_BLOCK_PLACEHOLDER_<n> tokens."""
    blocks: list[CodeBlock] = []

    def _replace(match: re.Match) -> str:
        language, code = match.group(1), match.group(2)
        token = placeholder_token(len(blocks))
        element_id = f"code-{uuid.uuid4().hex[:12]}"
        blocks.append(CodeBlock(
            placeholder=token,
            language=language or "text",
            code=code,
            element_id=element_id,
            html=render_code_block(language, code, element_id),
        ))
        return token

    processed = CODE_FENCE_RE.sub(_replace, content)
    logger.info(f"Extracted {len(blocks)} code blocks from markdown")
    return processed, blocks


def convert_headers(content: str) -> str:
    def _replace(match: re.Match) -> str:
        level = HEADING_LEVELS[len(match.group(1))]
        return f"<h{level}>{match.group(2).strip()}</h{level}>"

    return HEADER_RE.sub(_replace, content)


def _render_inline_code(match: re.Match) -> str:
    # * and _ become entities so the emphasis rules leave code spans alone
    code = html.escape(match.group(1), quote=False).replace("*", "&#42;").replace("_", "&#95;")
    return f"<code>{code}</code>"


def convert_inline_code(content: str) -> str:
    return INLINE_CODE_RE.sub(_render_inline_code, content)


def convert_formatting(content: str) -> str:
    """Inline code, then bold, then italic."""
    content = convert_inline_code(content)
    for pattern, replacement in INLINE_RULES:
        content = pattern.sub(replacement, content)
    return content


def convert_lists(content: str) -> str:
    output: list[str] = []
    items: list[str] = []

    def _close() -> None:
        if items:
            output.append("<ul>\n" + "".join(f"<li>{item}</li>\n" for item in items) + "</ul>")
            items.clear()

    for line in content.split("\n"):
        match = LIST_ITEM_RE.match(line)
        if match:
            items.append(match.group(1))
        else:
            _close()
            output.append(line)
    _close()

    return "\n".join(output)


def convert_paragraphs(content: str) -> str:
    lines = []
    for line in content.split("\n"):
        stripped = line.strip()
        # lines already carrying markup pass through untouched
        if not stripped or ANY_PLACEHOLDER_RE.search(line) or stripped.startswith("<"):
            lines.append(line)
        else:
            lines.append(f"<p>{line}</p>")
    return "\n".join(lines)


def format_numbered_items(content: str) -> str:
    """Badge numbered lines the model wrote outside a real list."""
    return NUMBERED_PARAGRAPH_RE.sub(
        r'<p class="numbered-item"><span class="item-number">\1.</span> \2</p>',
        content,
    )


# Restoration rules, tried in order. Earlier passes can wrap a token in <p> or
# read its underscores as emphasis markers; each observed shape gets an entry.
CONTEXT_RULES: list[tuple[str, re.Pattern]] = [
    ("before-example", re.compile(
        r"(<h[23]>[^<]*?Before\b.*?</h[23]>\s*)<p>CODE[_<].*?PLACEHOLDER_(\d+)(?!\d).*?</p>")),
    ("after-example", re.compile(
        r"(<h[23]>[^<]*?After\b.*?</h[23]>\s*)<p>CODE[_<].*?PLACEHOLDER_(\d+)(?!\d).*?</p>")),
]

LITERAL_VARIANTS: list[tuple[str, Callable[[int], str]]] = [
    ("paragraph", lambda i: f"<p>{placeholder_token(i)}</p>"),
    ("indented-paragraph", lambda i: f"<p>  {placeholder_token(i)}</p>"),
    ("em-underscores-paragraph", lambda i: f"<p>{placeholder_token(i).replace('_', '<em>_</em>')}</p>"),
    ("em-underscores-indented", lambda i: f"<p>  {placeholder_token(i).replace('_', '<em>_</em>')}</p>"),
    ("em-block-paragraph", lambda i: f"<p>CODE<em>BLOCK</em>PLACEHOLDER_{i}</p>"),
    ("em-placeholder-paragraph", lambda i: f"<p>CODE_BLOCK<em>PLACEHOLDER</em>_{i}</p>"),
    ("em-separators-paragraph", lambda i: f"<p>CODE<em>_</em>BLOCK<em>_</em>PLACEHOLDER_{i}</p>"),
    ("em-block", lambda i: f"CODE<em>BLOCK</em>PLACEHOLDER_{i}"),
    ("plain", placeholder_token),
]

PERMISSIVE_TEMPLATE = (
    r"(?:<p>\s*)?CODE(?:_|</?em>)*BLOCK(?:_|</?em>)*PLACEHOLDER(?:_|</?em>)*{index}(?!\d)"
    r"(?:\s*(?:</em>)?\s*</p>)?"
)


def _literal_replace(content: str, literal: str, replacement: str) -> str | None:
    # PLACEHOLDER_1 must not match the front of PLACEHOLDER_12
    match = re.search(re.escape(literal) + r"(?!\d)", content)
    if match is None:
        return None
    return content[:match.start()] + replacement + content[match.end():]


def restore_code_blocks(content: str, code_blocks: list[CodeBlock]) -> tuple[str, list[str]]:
    """Swap placeholders back to rendered blocks.

    Returns the restored HTML and the placeholders that matched no rule; those
    are left in the output as they were.
    """
    by_index = {i: block for i, block in enumerate(code_blocks)}
    restored: set[int] = set()

    for name, pattern in CONTEXT_RULES:
        def _replace(match: re.Match) -> str:
            index = int(match.group(2))
            block = by_index.get(index)
            if block is None or index in restored:
                return match.group(0)
            restored.add(index)
            logger.debug(f"Restored placeholder {index} via {name}")
            return match.group(1) + block.html

        content = pattern.sub(_replace, content)

    for index, block in by_index.items():
        if index in restored:
            continue
        for name, variant in LITERAL_VARIANTS:
            replaced = _literal_replace(content, variant(index), block.html)
            if replaced is not None:
                content = replaced
                restored.add(index)
                logger.debug(f"Restored placeholder {index} via {name}")
                break
        else:
            pattern = re.compile(PERMISSIVE_TEMPLATE.format(index=index))
            content, count = pattern.subn(lambda _m: block.html, content, count=1)
            if count:
                restored.add(index)
                logger.debug(f"Restored placeholder {index} via permissive match")

    unmatched = [block.placeholder for i, block in by_index.items() if i not in restored]
    if unmatched:
        logger.warning(f"{len(unmatched)} code block placeholders could not be restored: {unmatched}")
    return content, unmatched


def convert_markdown(markdown: str) -> ConversionResult:
    """Run the full pipeline and return the HTML fragment."""
    content = trim_boilerplate(markdown)
    content, code_blocks = extract_code_blocks(content)
    content = convert_headers(content)
    content = convert_formatting(content)
    content = convert_lists(content)
    content = convert_paragraphs(content)
    content = format_numbered_items(content)
    content, unmatched = restore_code_blocks(content, code_blocks)
    return ConversionResult(html=content, code_blocks=code_blocks, unmatched_placeholders=unmatched)
