"""Run-level aggregation: per-endpoint summaries and the final ranking."""

from __future__ import annotations

import logging
from statistics import fmean

from ..state import (
    RunResult,
    JobScores,
    RankingEntry,
    OutcomeStatus,
    EndpointSummary,
    BenchmarkReport,
    FailureScorePolicy,
)
from .ranking import rank_job

logger = logging.getLogger(__name__)


def _mean(values: list[float]) -> float | None:
    return fmean(values) if values else None


def summarize_endpoint(name: str, result: RunResult, job_scores: list[JobScores]) -> EndpointSummary:
    outcomes = result.outcomes_for(name)
    counts = {status: 0 for status in OutcomeStatus if status.terminal}
    for outcome in outcomes:
        counts[outcome.status] = counts.get(outcome.status, 0) + 1

    send_latencies = [o.send_latency_s for o in outcomes if o.send_latency_s is not None]
    confirm_latencies = [o.confirm_latency_s for o in outcomes if o.confirm_latency_s is not None]
    return EndpointSummary(
        name=name,
        score=sum(scores.scores.get(name, 0) for scores in job_scores),
        status_counts=counts,
        mean_send_latency_s=_mean(send_latencies),
        mean_confirm_latency_s=_mean(confirm_latencies),
        total_delta_s=sum(scores.deltas_s.get(name, 0.0) for scores in job_scores),
    )


def build_ranking(summaries: dict[str, EndpointSummary]) -> tuple[RankingEntry, ...]:
    """Order endpoints by ascending score, ties broken by name."""
    ordered = sorted(summaries.values(), key=lambda summary: (summary.score, summary.name))
    return tuple(
        RankingEntry(position=position, name=summary.name, score=summary.score)
        for position, summary in enumerate(ordered, start=1)
    )


def score(result: RunResult, policy: FailureScorePolicy | None = None) -> BenchmarkReport:
    """Aggregate a RunResult into a BenchmarkReport.

    Pure and deterministic: the same RunResult and policy always produce the
    same report. Jobs whose signing failed contribute nothing but are listed
    in ``failed_jobs``.
    """
    policy = policy or FailureScorePolicy()
    job_scores = [rank_job(record, policy) for record in result.signed_jobs]
    summaries = {name: summarize_endpoint(name, result, job_scores) for name in result.endpoints}
    report = BenchmarkReport(
        ranking=build_ranking(summaries),
        summaries=summaries,
        job_scores=tuple(job_scores),
        failed_jobs=tuple(record.sequence_index for record in result.failed_jobs),
    )
    logger.debug("Scored %d job(s) across %d endpoint(s)", len(job_scores), len(summaries))
    return report


__all__ = ["build_ranking", "score", "summarize_endpoint"]
