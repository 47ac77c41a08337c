from .markdown import convert_markdown, ConversionResult, CodeBlock
from .postprocess import postprocess_report, report_sections, copy_targets, ReportSection
from .template import convert_markdown_file, ConversionOutcome
from .pdf import PdfRenderer, CommandPdfRenderer

__all__ = [
    "convert_markdown",
    "ConversionResult",
    "CodeBlock",
    "postprocess_report",
    "report_sections",
    "copy_targets",
    "ReportSection",
    "convert_markdown_file",
    "ConversionOutcome",
    "PdfRenderer",
    "CommandPdfRenderer",
]
