"""Hand-off from the summary pipeline to the HTML page templates."""

import os
from typing import Any, Dict

from fastapi import Request
from fastapi.templating import Jinja2Templates

from tagsummary.schemas import SummaryResult

TEMPLATES_DIR = os.getenv(
    "TEMPLATES_DIR",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates"),
)

templates = Jinja2Templates(directory=TEMPLATES_DIR)


def render_summary_page(request: Request, title: str, result: SummaryResult, base_path: str):
    """
    Render a summary result. `base_path` is the note the summary was requested
    from and is what relative links resolve against; an empty result shows the
    placeholder instead of an empty region.
    """
    context: Dict[str, Any] = {
        "title": title,
        "base_path": base_path,
        "markdown": result.markdown,
        "empty": result.empty,
        "message": result.message,
    }
    return templates.TemplateResponse(request, "summary.html", context)


def render_index_page(request: Request, notes: list):
    return templates.TemplateResponse(request, "index.html", {"notes": notes})
