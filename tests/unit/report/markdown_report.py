"""Unit tests for Markdown report rendering."""

from __future__ import annotations

from rpcbench.scoring import score
from rpcbench.state import JobRecord, OutcomeStatus
from rpcbench.report import format_duration, render_markdown
from tests.helpers.builders import job_record, run_result, unsigned_job

S = OutcomeStatus


def _report():
    result = run_result(
        ["alpha", "beta"],
        [
            job_record(0, {"alpha": (S.SUCCESS, 1.0), "beta": (S.SUCCESS, 1.0025)}),
            job_record(1, {"alpha": (S.TIMED_OUT, None), "beta": (S.SUCCESS, 2.0015)}),
            JobRecord(job=unsigned_job(2, reason="signing: no block reference: down")),
        ],
    )
    return result, score(result)


def test_format_duration_units() -> None:
    assert format_duration(None) == "N/A"
    assert format_duration(0.0) == "0 μs"
    assert format_duration(0.000250) == "250 μs"
    assert format_duration(0.0025) == "2.50 ms"
    assert format_duration(3.5) == "3.50 s"


def test_ranking_table_lists_counts_and_order() -> None:
    markdown = render_markdown(*_report())

    assert "## Endpoint Ranking (Lower Score is Better)" in markdown
    assert "| 1 | alpha | 3 | 1 | 0 | 1 | 0 | 10.0 | 1000.0 |" in markdown
    assert "| 2 | beta | 3 | 2 | 0 | 0 | 0 | 10.0 | 1502.0 |" in markdown


def test_delta_table_marks_unsuccessful_as_na() -> None:
    markdown = render_markdown(*_report())

    assert "| Signature | alpha (Δ) | beta (Δ) |" in markdown
    assert "| sig0 | 0 μs | 2.50 ms |" in markdown
    assert "| sig1 | N/A | 0 μs |" in markdown


def test_delta_totals_and_unsigned_jobs() -> None:
    markdown = render_markdown(*_report())

    assert "## Endpoint Σ Δ (Lower is Better)" in markdown
    assert "| 1 | alpha | 0 μs |" in markdown
    assert "| 2 | beta | 2.50 ms |" in markdown
    assert "- job 2: signing: no block reference: down" in markdown
