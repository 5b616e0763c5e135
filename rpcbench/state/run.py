"""Run result dataclasses."""

from __future__ import annotations

from datetime import datetime
from dataclasses import field, dataclass

from .job import TransactionJob
from .outcome import EndpointOutcome


@dataclass
class JobRecord:
    """One job plus its per-endpoint outcomes, keyed by endpoint name."""

    job: TransactionJob
    outcomes: dict[str, EndpointOutcome] = field(default_factory=dict)

    @property
    def sequence_index(self) -> int:
        return self.job.sequence_index

    @property
    def signature(self) -> str | None:
        return self.job.signature


@dataclass
class RunResult:
    """Complete output of one benchmark run.

    Attributes:
        endpoints: Endpoint names in configuration order.
        jobs: One record per iteration, ordered by sequence_index.
        started_at: Wall-clock start of the run.
        finished_at: Wall-clock end of the run.
    """

    endpoints: list[str]
    jobs: list[JobRecord]
    started_at: datetime
    finished_at: datetime

    @property
    def signed_jobs(self) -> list[JobRecord]:
        return [record for record in self.jobs if record.job.signed]

    @property
    def failed_jobs(self) -> list[JobRecord]:
        return [record for record in self.jobs if not record.job.signed]

    def outcomes_for(self, endpoint_name: str) -> list[EndpointOutcome]:
        """Return every outcome recorded for one endpoint, in job order."""
        return [
            record.outcomes[endpoint_name]
            for record in self.jobs
            if endpoint_name in record.outcomes
        ]


__all__ = ["JobRecord", "RunResult"]
