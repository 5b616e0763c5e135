"""Markdown rendering of a scored benchmark run."""

from __future__ import annotations

from ..state import RunResult, BenchmarkReport


def format_duration(seconds: float | None) -> str:
    """Render a duration with a unit that keeps two decimals meaningful."""
    if seconds is None:
        return "N/A"
    us = round(seconds * 1_000_000)
    if us == 0:
        return "0 μs"
    if us < 1_000:
        return f"{us} μs"
    if us < 1_000_000:
        return f"{us / 1_000:.2f} ms"
    return f"{us / 1_000_000:.2f} s"


def _format_ms(seconds: float | None) -> str:
    if seconds is None:
        return "N/A"
    return f"{seconds * 1000.0:.1f}"


def _row(cells: list[object]) -> str:
    return "| " + " | ".join(str(cell) for cell in cells) + " |"


def _table(header: list[str], rows: list[list[object]]) -> list[str]:
    lines = [_row(header), "|" + "---|" * len(header)]
    lines.extend(_row(row) for row in rows)
    return lines


def render_ranking(report: BenchmarkReport) -> list[str]:
    rows = []
    for entry in report.ranking:
        summary = report.summaries[entry.name]
        rows.append(
            [
                entry.position,
                entry.name,
                entry.score,
                summary.successes,
                summary.failures,
                summary.timeouts,
                summary.send_errors,
                _format_ms(summary.mean_send_latency_s),
                _format_ms(summary.mean_confirm_latency_s),
            ]
        )
    header = [
        "Order",
        "Endpoint",
        "Score",
        "Success",
        "Failed",
        "Timed out",
        "Send error",
        "Mean send (ms)",
        "Mean confirm (ms)",
    ]
    return ["## Endpoint Ranking (Lower Score is Better)", "", *_table(header, rows)]


def render_deltas(result: RunResult, report: BenchmarkReport) -> list[str]:
    names = list(result.endpoints)
    rows = []
    for scores in report.job_scores:
        cells: list[object] = [scores.signature]
        cells.extend(format_duration(scores.deltas_s.get(name)) for name in names)
        rows.append(cells)
    header = ["Signature", *(f"{name} (Δ)" for name in names)]
    return ["## Per-Signature Δ from Fastest", "", *_table(header, rows)]


def render_delta_totals(report: BenchmarkReport) -> list[str]:
    ordered = sorted(report.summaries.values(), key=lambda summary: (summary.total_delta_s, summary.name))
    rows = [
        [position, summary.name, format_duration(summary.total_delta_s)]
        for position, summary in enumerate(ordered, start=1)
    ]
    return [
        "## Endpoint Σ Δ (Lower is Better)",
        "",
        *_table(["Order", "Endpoint", "Σ Δ"], rows),
    ]


def render_failed_jobs(result: RunResult) -> list[str]:
    failed = result.failed_jobs
    if not failed:
        return []
    lines = ["## Unsigned Jobs", ""]
    lines.extend(f"- job {record.sequence_index}: {record.job.signing_error}" for record in failed)
    return lines


def render_markdown(result: RunResult, report: BenchmarkReport) -> str:
    """Render the full Markdown report."""
    duration_s = (result.finished_at - result.started_at).total_seconds()
    sections = [
        [
            "# RPC Confirmation Benchmark",
            "",
            f"- Started: {result.started_at.isoformat()}",
            f"- Duration: {duration_s:.1f} s",
            f"- Endpoints: {len(result.endpoints)}",
            f"- Signed jobs: {len(result.signed_jobs)} of {len(result.jobs)}",
        ],
        render_ranking(report),
        render_deltas(result, report),
        render_delta_totals(report),
        render_failed_jobs(result),
    ]
    return "\n\n".join("\n".join(section) for section in sections if section) + "\n"


__all__ = [
    "format_duration",
    "render_delta_totals",
    "render_deltas",
    "render_failed_jobs",
    "render_markdown",
    "render_ranking",
]
