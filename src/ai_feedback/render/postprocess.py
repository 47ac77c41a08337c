# src/ai_feedback/render/postprocess.py
"""Navigation and score badges for a rendered report.

The work is split into `plan_report`, which only reads the tree, and
`apply_plan`, which performs the recorded edits. `postprocess_report` always
starts from the HTML text it is given, and a heading that already carries a
score container is left alone, so feeding it its own output changes nothing.
"""
import re
from dataclasses import dataclass, field
from bs4 import BeautifulSoup, Tag


SECTION_IDS: list[tuple[str, str]] = [
    ("executive summary", "executive-summary"),
    ("code architecture", "code-architecture"),
    ("architecture", "code-architecture"),
    ("critical issues", "critical-issues"),
    ("code quality", "code-quality"),
    ("performance", "performance-analysis"),
    ("security", "security-review"),
    ("maintainability", "maintainability"),
    ("refactoring", "recommended-refactoring"),
    ("best practices", "best-practices"),
    ("learning resources", "learning-resources"),
]
UNSCORED_SECTIONS = {"learning-resources"}

HEADING_NUMBER_RE = re.compile(r"^\d+\.?\s+")
SECTION_SCORE_RE = re.compile(r"Section\s+Score:\s*(\d+)/10", re.IGNORECASE)
SCORE_RE = re.compile(r"\b((?:[a-z]+\s+){0,3})score:\s*(\d+)/10\b", re.IGNORECASE)
SCORE_ONLY_RE = re.compile(r"^[a-z\s]+score:\s*\d+/10$", re.IGNORECASE)
MAX_LOOKAHEAD = 5
INLINE_TAGS = {"strong", "em", "b", "i", "span", "code"}


def section_id_for(heading_text: str) -> str | None:
    text = HEADING_NUMBER_RE.sub("", heading_text.strip().lower())
    for keyword, section_id in SECTION_IDS:
        if keyword in text:
            return section_id
    return None


def score_band(score: int) -> str:
    if score >= 8:
        return "good"
    if score >= 5:
        return "medium"
    return "bad"


@dataclass
class ReportSection:
    heading: str
    anchor_id: str | None
    score: int | None = None

    @property
    def band(self) -> str | None:
        return score_band(self.score) if self.score is not None else None


@dataclass
class ReportPlan:
    sections: list[ReportSection] = field(default_factory=list)
    id_assignments: list[tuple[Tag, str]] = field(default_factory=list)
    badges: list[tuple[Tag, int]] = field(default_factory=list)
    score_elements: list[Tag] = field(default_factory=list)


def _following(heading: Tag):
    """Element siblings after heading, up to the next h2."""
    for sibling in heading.find_next_siblings():
        if sibling.name == "h2":
            return
        yield sibling


def _find_score(heading: Tag) -> int | None:
    for element in _following(heading):
        if element.name == "p" and "Section Score:" in element.get_text():
            match = SECTION_SCORE_RE.search(element.get_text())
            if match:
                return int(match.group(1))

    for i, element in enumerate(_following(heading)):
        if i >= MAX_LOOKAHEAD:
            break
        match = SCORE_RE.search(element.get_text())
        if match:
            return int(match.group(2))
    return None


def _has_score_container(heading: Tag) -> bool:
    sibling = heading.find_next_sibling()
    return sibling is not None and "score-container" in (sibling.get("class") or [])


def plan_report(soup: BeautifulSoup) -> ReportPlan:
    plan = ReportPlan()

    for heading in soup.find_all("h2"):
        text = heading.get_text().strip()
        section_id = section_id_for(text)
        section = ReportSection(heading=text, anchor_id=section_id)
        plan.sections.append(section)

        if section_id is None:
            continue
        plan.id_assignments.append((heading, section_id))

        if section_id in UNSCORED_SECTIONS or _has_score_container(heading):
            continue

        score = _find_score(heading)
        if score is None:
            continue
        section.score = score
        plan.badges.append((heading, score))
        plan.score_elements.extend(
            element for element in _following(heading) if SCORE_RE.search(element.get_text())
        )

    return plan


def _score_badge(soup: BeautifulSoup, score: int) -> Tag:
    container = soup.new_tag("div", attrs={"class": "score-container"})
    label = soup.new_tag("div", attrs={"class": "score-label"})
    label.string = "Section Score:"
    badge = soup.new_tag("div", attrs={"class": f"score score-{score_band(score)}"})
    badge.string = f"{score}/10"
    container.append(label)
    container.append(badge)
    return container


def _strip_score(element: Tag) -> None:
    """Cut the first score phrase out of element; drop element if nothing is left."""
    if element.name == "p" and SCORE_ONLY_RE.match(element.get_text().strip()):
        element.decompose()
        return

    match = SCORE_RE.search(element.get_text())
    if match:
        _cut_text(element, match.start(), match.end())

    if not element.get_text().strip():
        element.decompose()


def _cut_text(element: Tag, start: int, end: int) -> None:
    """Remove element.get_text()[start:end], even when it spans several tags."""
    position = 0
    for node in list(element.strings):
        text = str(node)
        node_start = position
        position += len(text)
        if position <= start or node_start >= end:
            continue
        node.replace_with(text[:max(start - node_start, 0)] + text[max(end - node_start, 0):])

    for tag in reversed(element.find_all(True)):
        if tag.name in INLINE_TAGS and not tag.get_text().strip():
            tag.decompose()


def apply_plan(soup: BeautifulSoup, plan: ReportPlan) -> None:
    for heading, section_id in plan.id_assignments:
        heading["id"] = section_id
    for heading, score in plan.badges:
        heading.insert_after(_score_badge(soup, score))
    for element in plan.score_elements:
        _strip_score(element)


def postprocess_report(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    apply_plan(soup, plan_report(soup))
    return str(soup)


def report_sections(html: str) -> list[ReportSection]:
    return plan_report(BeautifulSoup(html, "html.parser")).sections


def copy_targets(html: str) -> dict[str, str]:
    """Text each copy button puts on the clipboard, keyed by code element id."""
    soup = BeautifulSoup(html, "html.parser")
    targets = {}
    for button in soup.select(".copy-btn[data-clipboard-target]"):
        target_id = button["data-clipboard-target"].lstrip("#")
        code = soup.find(id=target_id)
        if code is None:
            continue
        targets[target_id] = "".join(line.get_text() + "\n" for line in code.select(".code-line"))
    return targets
