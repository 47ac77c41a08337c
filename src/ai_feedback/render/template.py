# src/ai_feedback/render/template.py
import logging
import os
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from ai_feedback.config import Settings
from .markdown import convert_markdown
from .postprocess import postprocess_report


logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_TEMPLATE_PATH = PACKAGE_DIR / "templates" / "report.html"
ASSET_SOURCES = {
    "report.css": PACKAGE_DIR / "assets" / "report.css",
    "report.js": PACKAGE_DIR / "assets" / "report.js",
}
MINIMAL_ASSETS = {
    "report.css": "body { font-family: Arial, sans-serif; }\n",
    "report.js": "console.log('Report loaded');\n",
}

FALLBACK_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Code Analysis Report</title>
    <link rel="stylesheet" href="{{cssPath}}">
</head>
<body>
    <header>
        <h1>Code Analysis Report</h1>
        <p id="report-date">Generated on {{generationDate}}</p>
    </header>
    <main>
        {{processedContent}}
    </main>
    <script src="{{scriptPath}}"></script>
</body>
</html>
"""


@dataclass
class ConversionOutcome:
    path: Path
    converted: bool
    warnings: list[str] = field(default_factory=list)
    unmatched_placeholders: list[str] = field(default_factory=list)


def load_template(template_path: str | Path | None = None) -> tuple[str, str | None]:
    """Read the report template, or fall back to the built-in one.

    Returns the template and a warning message when the fallback was used.
    """
    path = Path(template_path) if template_path else DEFAULT_TEMPLATE_PATH
    try:
        return path.read_text(encoding="utf-8"), None
    except OSError as e:
        logger.error(f"Error reading template {path}: {e}")
        return FALLBACK_TEMPLATE, f"Report template not found at {path}; using the built-in template"


def fill_template(template: str, content: str, css_path: str, script_path: str, generated_at: datetime) -> str:
    # content goes in last so markers inside the report text stay untouched
    return (
        template
        .replace("{{cssPath}}", css_path)
        .replace("{{scriptPath}}", script_path)
        .replace("{{generationDate}}", generated_at.strftime("%Y-%m-%d %H:%M:%S"))
        .replace("{{processedContent}}", content)
    )


def prepare_assets(html_path: Path) -> tuple[str, str, list[str]]:
    """Copy the stylesheet and script into <html dir>/assets.

    Returns the css and js paths relative to the HTML file plus any warnings.
    """
    assets_dir = html_path.parent / "assets"
    assets_dir.mkdir(parents=True, exist_ok=True)
    warnings = []

    for name, source in ASSET_SOURCES.items():
        target = assets_dir / name
        try:
            shutil.copyfile(source, target)
        except OSError as e:
            logger.error(f"Error copying asset {source}: {e}")
            warnings.append(f"Asset {name} missing; wrote a minimal replacement")
            target.write_text(MINIMAL_ASSETS[name], encoding="utf-8")

    def _relative(name: str) -> str:
        return os.path.relpath(assets_dir / name, html_path.parent).replace("\\", "/")

    return _relative("report.css"), _relative("report.js"), warnings


def convert_markdown_file(markdown_path: str | Path, settings: Settings) -> ConversionOutcome:
    """Write <name>.html next to the markdown report.

    On any failure the markdown path is returned so the caller can still open
    the raw report.
    """
    markdown_path = Path(markdown_path)
    try:
        logger.info(f"Starting HTML conversion for: {markdown_path}")
        markdown = markdown_path.read_text(encoding="utf-8")
        html_path = markdown_path.with_suffix(".html")

        result = convert_markdown(markdown)
        content = postprocess_report(result.html)

        warnings = []
        template, template_warning = load_template(settings.template_path)
        if template_warning:
            warnings.append(template_warning)
        css_path, script_path, asset_warnings = prepare_assets(html_path)
        warnings.extend(asset_warnings)
        if result.unmatched_placeholders:
            warnings.append(f"{len(result.unmatched_placeholders)} code blocks could not be restored")

        html_path.write_text(
            fill_template(template, content, css_path, script_path, datetime.now()),
            encoding="utf-8",
        )
        logger.info(f"HTML file created: {html_path}")
        return ConversionOutcome(
            path=html_path,
            converted=True,
            warnings=warnings,
            unmatched_placeholders=result.unmatched_placeholders,
        )
    except Exception as e:
        logger.exception(f"Error converting markdown to HTML: {e}")
        return ConversionOutcome(
            path=markdown_path,
            converted=False,
            warnings=[f"HTML conversion failed ({e}); opening the markdown report instead"],
        )
