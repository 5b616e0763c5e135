"""Report rendering (Markdown and JSON) and file output."""

from .json import render_json, report_to_dict
from .markdown import format_duration, render_markdown
from .files import REPORT_FORMATS, write_reports

__all__ = [
    "REPORT_FORMATS",
    "format_duration",
    "render_json",
    "render_markdown",
    "report_to_dict",
    "write_reports",
]
