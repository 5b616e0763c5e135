"""JSON-ready rendering of a scored benchmark run."""

from __future__ import annotations

import json
from typing import Any

from ..state import RunResult, BenchmarkReport, EndpointOutcome


def _round(value: float | None, decimals: int = 6) -> float | None:
    if value is None:
        return None
    return round(value, decimals)


def outcome_to_dict(outcome: EndpointOutcome) -> dict[str, Any]:
    return {
        "endpoint": outcome.endpoint_name,
        "status": outcome.status.value,
        "reason": outcome.reason,
        "slot": outcome.slot,
        "send_start": outcome.send_start,
        "send_ack": outcome.send_ack,
        "confirm_at": outcome.confirm_at,
        "resolved_at": outcome.resolved_at,
        "send_latency_s": _round(outcome.send_latency_s),
        "confirm_latency_s": _round(outcome.confirm_latency_s),
    }


def report_to_dict(result: RunResult, report: BenchmarkReport) -> dict[str, Any]:
    """Flatten the run and its scores into plain JSON types."""
    scores_by_index = {scores.sequence_index: scores for scores in report.job_scores}
    jobs = []
    for record in result.jobs:
        job = record.job
        scores = scores_by_index.get(job.sequence_index)
        jobs.append(
            {
                "sequence_index": job.sequence_index,
                "signature": job.signature,
                "amount": job.amount,
                "block_reference": job.block_reference,
                "build_latency_s": _round(job.build_latency_s),
                "signing_error": job.signing_error,
                "scores": dict(scores.scores) if scores else {},
                "deltas_s": {k: _round(v) for k, v in scores.deltas_s.items()} if scores else {},
                "outcomes": [outcome_to_dict(record.outcomes[name]) for name in record.outcomes],
            }
        )

    summaries = {
        name: {
            "score": summary.score,
            "success": summary.successes,
            "failed": summary.failures,
            "timed_out": summary.timeouts,
            "send_error": summary.send_errors,
            "mean_send_latency_s": _round(summary.mean_send_latency_s),
            "mean_confirm_latency_s": _round(summary.mean_confirm_latency_s),
            "total_delta_s": _round(summary.total_delta_s),
        }
        for name, summary in report.summaries.items()
    }

    return {
        "started_at": result.started_at.isoformat(),
        "finished_at": result.finished_at.isoformat(),
        "endpoints": list(result.endpoints),
        "ranking": [
            {"position": entry.position, "endpoint": entry.name, "score": entry.score}
            for entry in report.ranking
        ],
        "summaries": summaries,
        "failed_jobs": list(report.failed_jobs),
        "jobs": jobs,
    }


def render_json(result: RunResult, report: BenchmarkReport) -> str:
    return json.dumps(report_to_dict(result, report), indent=2, ensure_ascii=False) + "\n"


__all__ = ["outcome_to_dict", "render_json", "report_to_dict"]
