"""Report file output."""

from __future__ import annotations

import logging
from pathlib import Path

from ..state import RunResult, BenchmarkReport
from .json import render_json
from .markdown import render_markdown

logger = logging.getLogger(__name__)

REPORT_FORMATS = ("markdown", "json", "both")
MARKDOWN_FILENAME = "report.md"
JSON_FILENAME = "report.json"


def write_reports(
    output_dir: str | Path,
    result: RunResult,
    report: BenchmarkReport,
    *,
    fmt: str = "both",
) -> list[Path]:
    """Write report.md and/or report.json under ``output_dir``.

    Returns the written paths.
    """
    if fmt not in REPORT_FORMATS:
        raise ValueError(f"unknown report format {fmt!r}")
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    if fmt in ("markdown", "both"):
        path = directory / MARKDOWN_FILENAME
        path.write_text(render_markdown(result, report), encoding="utf-8")
        written.append(path)
    if fmt in ("json", "both"):
        path = directory / JSON_FILENAME
        path.write_text(render_json(result, report), encoding="utf-8")
        written.append(path)
    for path in written:
        logger.info("Wrote %s", path)
    return written


__all__ = ["JSON_FILENAME", "MARKDOWN_FILENAME", "REPORT_FORMATS", "write_reports"]
