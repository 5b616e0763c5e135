"""Per-job ranking of endpoints by confirmation time."""

from __future__ import annotations

from ..state import JobRecord, JobScores, OutcomeStatus, FailureScorePolicy


def failure_sentinel(policy: FailureScorePolicy, endpoint_count: int, successes: int) -> int:
    """Score given to an endpoint that did not confirm the job.

    Never better than the slowest successful endpoint's rank, which is at
    most ``successes``.
    """
    if policy.mode == "successes_plus_one":
        return successes + 1
    if policy.mode == "fixed":
        return max(policy.fixed_value, successes)
    return endpoint_count


def rank_job(record: JobRecord, policy: FailureScorePolicy) -> JobScores:
    """Score every outcome of one signed job.

    Successful endpoints are ranked by ``confirm_at`` (1 = fastest); equal
    timestamps share the lowest rank of their group. All other terminal
    outcomes receive the policy sentinel, plus ``timed_out_penalty`` for
    time-outs.
    """
    outcomes = record.outcomes
    successful = sorted(
        (outcome for outcome in outcomes.values() if outcome.status is OutcomeStatus.SUCCESS),
        key=lambda outcome: (outcome.confirm_at, outcome.endpoint_name),
    )

    scores: dict[str, int] = {}
    deltas: dict[str, float] = {}
    fastest = successful[0].confirm_at if successful else None
    previous_at: float | None = None
    rank = 0
    for position, outcome in enumerate(successful, start=1):
        if outcome.confirm_at != previous_at:
            rank = position
            previous_at = outcome.confirm_at
        scores[outcome.endpoint_name] = rank
        deltas[outcome.endpoint_name] = outcome.confirm_at - fastest

    sentinel = failure_sentinel(policy, len(outcomes), len(successful))
    for name, outcome in outcomes.items():
        if name in scores:
            continue
        penalty = policy.timed_out_penalty if outcome.status is OutcomeStatus.TIMED_OUT else 0
        scores[name] = sentinel + penalty

    return JobScores(
        sequence_index=record.sequence_index,
        signature=record.signature,
        scores=scores,
        success_order=tuple(outcome.endpoint_name for outcome in successful),
        deltas_s=deltas,
    )


__all__ = ["failure_sentinel", "rank_job"]
