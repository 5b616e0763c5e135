"""Timing recorder: the run's slot table.

Slots are keyed by ``(job signature, endpoint name)`` and are all created by
``register_job`` before any concurrent work for that job begins. Each
dispatch/listener task then mutates only the outcome it was handed and hands
it back through ``publish`` once terminal; from then on the outcome is
read-only. No locks are needed because no two tasks share a slot.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from ..errors import SlotError
from ..state import JobRecord, RunResult, EndpointOutcome, TransactionJob

logger = logging.getLogger(__name__)


class TimingRecorder:
    """Collects per-job, per-endpoint outcomes for one run."""

    def __init__(self, endpoint_names: list[str]) -> None:
        if len(set(endpoint_names)) != len(endpoint_names):
            raise SlotError("endpoint names must be unique")
        self._endpoint_names = list(endpoint_names)
        self._records: dict[int, JobRecord] = {}
        self._signatures: dict[str, int] = {}
        self._published: set[tuple[str, str]] = set()
        self._started_at = datetime.now(timezone.utc)

    def register_job(self, job: TransactionJob) -> JobRecord:
        """Create the job record and one pending slot per endpoint."""
        self._check_new_index(job.sequence_index)
        if not job.signed:
            raise SlotError(f"job {job.sequence_index} is not signed")
        if job.signature in self._signatures:
            raise SlotError(
                f"signature {job.signature} already registered by job "
                f"{self._signatures[job.signature]}"
            )
        record = JobRecord(
            job=job,
            outcomes={
                name: EndpointOutcome(endpoint_name=name, job_signature=job.signature)
                for name in self._endpoint_names
            },
        )
        self._records[job.sequence_index] = record
        self._signatures[job.signature] = job.sequence_index
        return record

    def record_failed_job(self, job: TransactionJob) -> JobRecord:
        """Record an iteration that never produced a signed transaction."""
        self._check_new_index(job.sequence_index)
        if job.signed:
            raise SlotError(f"job {job.sequence_index} is signed; use register_job")
        record = JobRecord(job=job)
        self._records[job.sequence_index] = record
        return record

    def slot(self, signature: str, endpoint_name: str) -> EndpointOutcome:
        """Return the pre-assigned outcome for one (job, endpoint) pair."""
        index = self._signatures.get(signature)
        if index is None:
            raise SlotError(f"unknown job signature {signature}")
        outcome = self._records[index].outcomes.get(endpoint_name)
        if outcome is None:
            raise SlotError(f"unknown endpoint {endpoint_name!r}")
        return outcome

    def publish(self, outcome: EndpointOutcome) -> None:
        """Accept a finished outcome; ownership passes to the aggregator."""
        if self.slot(outcome.job_signature, outcome.endpoint_name) is not outcome:
            raise SlotError(f"outcome {outcome.key} does not own its slot")
        if not outcome.terminal:
            raise SlotError(f"outcome {outcome.key} published in state {outcome.status.value}")
        if outcome.key in self._published:
            raise SlotError(f"outcome {outcome.key} already published")
        self._published.add(outcome.key)
        logger.debug(
            "Recorded %s for %s on %s",
            outcome.status.value,
            outcome.job_signature,
            outcome.endpoint_name,
        )

    def is_complete(self, signature: str) -> bool:
        index = self._signatures.get(signature)
        if index is None:
            return False
        return all((signature, name) in self._published for name in self._records[index].outcomes)

    def result(self) -> RunResult:
        """Freeze the run into a RunResult ordered by sequence_index."""
        for signature in self._signatures:
            if not self.is_complete(signature):
                raise SlotError(f"job {signature} still has unpublished outcomes")
        return RunResult(
            endpoints=list(self._endpoint_names),
            jobs=[self._records[index] for index in sorted(self._records)],
            started_at=self._started_at,
            finished_at=datetime.now(timezone.utc),
        )

    def _check_new_index(self, sequence_index: int) -> None:
        if sequence_index in self._records:
            raise SlotError(f"job {sequence_index} already recorded")


__all__ = ["TimingRecorder"]
