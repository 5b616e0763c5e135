"""Scoring output dataclasses."""

from __future__ import annotations

from dataclasses import field, dataclass

from .outcome import OutcomeStatus


@dataclass(frozen=True, slots=True)
class JobScores:
    """Per-endpoint scores for one signed job.

    Attributes:
        sequence_index: Job position in the batch.
        signature: Job signature.
        scores: Endpoint name -> score for this job (1 = fastest).
        success_order: Successful endpoints, fastest first.
        deltas_s: Endpoint name -> seconds behind the fastest successful
            endpoint; only successful endpoints appear.
    """

    sequence_index: int
    signature: str
    scores: dict[str, int]
    success_order: tuple[str, ...]
    deltas_s: dict[str, float]


@dataclass(frozen=True, slots=True)
class EndpointSummary:
    """Aggregate behavior of one endpoint across the run."""

    name: str
    score: int
    status_counts: dict[OutcomeStatus, int]
    mean_send_latency_s: float | None
    mean_confirm_latency_s: float | None
    total_delta_s: float

    @property
    def successes(self) -> int:
        return self.status_counts.get(OutcomeStatus.SUCCESS, 0)

    @property
    def failures(self) -> int:
        return self.status_counts.get(OutcomeStatus.FAILED, 0)

    @property
    def timeouts(self) -> int:
        return self.status_counts.get(OutcomeStatus.TIMED_OUT, 0)

    @property
    def send_errors(self) -> int:
        return self.status_counts.get(OutcomeStatus.SEND_ERROR, 0)


@dataclass(frozen=True, slots=True)
class RankingEntry:
    position: int
    name: str
    score: int


@dataclass(frozen=True)
class BenchmarkReport:
    """Finished aggregate handed to report rendering."""

    ranking: tuple[RankingEntry, ...]
    summaries: dict[str, EndpointSummary]
    job_scores: tuple[JobScores, ...]
    failed_jobs: tuple[int, ...] = field(default_factory=tuple)


__all__ = ["BenchmarkReport", "EndpointSummary", "JobScores", "RankingEntry"]
