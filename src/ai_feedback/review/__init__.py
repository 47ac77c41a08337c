from .segmenter import iter_bullets, segment_bullets
from .parser import parse_feedback, find_sections, Section
from .prompts import build_quick_prompt, build_report_prompt
from .engine import ReviewEngine

__all__ = [
    "iter_bullets",
    "segment_bullets",
    "parse_feedback",
    "find_sections",
    "Section",
    "build_quick_prompt",
    "build_report_prompt",
    "ReviewEngine",
]
