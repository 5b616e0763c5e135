"""Dispatcher: fan one signed transaction out to every endpoint.

All submissions for a job start together and the dispatcher returns once
each has either been acknowledged or failed (join-all). A failed submission
is recorded as SEND_ERROR and published immediately; it is never retried
and never enters confirmation tracking.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from ..logging import log_context
from ..telemetry import capture_error
from ..rpc.base import RpcTransport
from ..errors import SubmissionError, describe_error
from ..state import Endpoint, EndpointOutcome, TransactionJob
from .recorder import TimingRecorder

logger = logging.getLogger(__name__)


class Dispatcher:
    """Submits byte-identical payloads to all endpoints concurrently."""

    def __init__(
        self,
        *,
        transport: RpcTransport,
        endpoints: list[Endpoint],
        recorder: TimingRecorder,
        clock: Callable[[], float],
    ) -> None:
        self._transport = transport
        self._endpoints = list(endpoints)
        self._recorder = recorder
        self._clock = clock

    async def dispatch(self, job: TransactionJob) -> dict[str, EndpointOutcome]:
        """Submit ``job`` everywhere; return outcomes keyed by endpoint name.

        Returned outcomes are either SUBMITTED (handed on to the listener)
        or SEND_ERROR (already published).
        """
        outcomes = await asyncio.gather(*(self._submit(job, endpoint) for endpoint in self._endpoints))
        return {outcome.endpoint_name: outcome for outcome in outcomes}

    async def _submit(self, job: TransactionJob, endpoint: Endpoint) -> EndpointOutcome:
        outcome = self._recorder.slot(job.signature, endpoint.name)
        with log_context(endpoint=endpoint.name):
            outcome.begin_send(self._clock())
            try:
                ack = await self._transport.submit(endpoint, job.payload)
            except SubmissionError as exc:
                outcome.mark_send_error(self._clock(), exc.reason)
                logger.warning("Submission failed: %s", exc.reason)
            except Exception as exc:  # noqa: BLE001
                outcome.mark_send_error(self._clock(), describe_error(exc))
                logger.exception("Unexpected submission error")
                capture_error(exc, extra={"signature": job.signature})
            else:
                outcome.mark_submitted(self._clock())
                if ack != job.signature:
                    logger.warning("Endpoint acknowledged %s, expected %s", ack, job.signature)
                logger.debug("Submitted in %.1f ms", outcome.send_latency_s * 1000.0)
                return outcome

        self._recorder.publish(outcome)
        return outcome


__all__ = ["Dispatcher"]
