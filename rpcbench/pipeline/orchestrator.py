"""Benchmark orchestration.

run_benchmark drives N iterations of build -> fan-out submit -> fan-out
listen. With ``pipeline_jobs`` enabled the next build starts as soon as the
current job's tracking task is launched, so listeners for many jobs may be
outstanding at once; otherwise each job is fully resolved before the next
build. The RunResult is always ordered by sequence_index.
"""

from __future__ import annotations

import time
import asyncio
import logging
from collections.abc import Callable

from ..logging import log_context
from ..errors import SlotError
from ..chain import Ed25519TransferSigner
from ..helpers.validation import validate_config
from ..rpc import HttpRpcTransport, WebSocketSubscriber
from ..rpc.base import RpcTransport, TransferSigner, SignatureSubscriber
from ..state import OutcomeStatus, BenchmarkConfig, RunResult, TransactionJob
from .factory import TransactionFactory
from .dispatcher import Dispatcher
from .listener import ConfirmationListener
from .recorder import TimingRecorder

logger = logging.getLogger(__name__)


class BenchmarkRun:
    """One run's wiring of factory, dispatcher, listener and recorder."""

    def __init__(
        self,
        config: BenchmarkConfig,
        *,
        transport: RpcTransport,
        subscriber: SignatureSubscriber,
        signer: TransferSigner,
        clock: Callable[[], float],
    ) -> None:
        self._config = config
        self._endpoints = list(config.endpoints)
        self._recorder = TimingRecorder([endpoint.name for endpoint in self._endpoints])
        self._factory = TransactionFactory(
            signer=signer,
            transport=transport,
            reference_endpoint=config.reference_endpoint,
            sender=config.sender,
            recipient=config.recipient,
            amount_for=config.amount_for,
            clock=clock,
        )
        self._dispatcher = Dispatcher(
            transport=transport,
            endpoints=self._endpoints,
            recorder=self._recorder,
            clock=clock,
        )
        self._listener = ConfirmationListener(
            subscriber=subscriber,
            recorder=self._recorder,
            timeout_s=config.confirmation_timeout_s,
            commitment=config.commitment,
            clock=clock,
        )

    async def run(self) -> RunResult:
        config = self._config
        logger.info(
            "Benchmarking %d endpoint(s) with %d transaction(s), commitment=%s, pipelined=%s",
            len(self._endpoints),
            config.num_transactions,
            config.commitment,
            config.pipeline_jobs,
        )

        in_flight: list[asyncio.Task] = []
        try:
            for sequence_index in range(config.num_transactions):
                with log_context(job_id=str(sequence_index)):
                    job = await self._factory.build(sequence_index)
                    if not self._register(job):
                        continue
                    task = asyncio.create_task(self._track(job))
                if config.pipeline_jobs:
                    in_flight.append(task)
                else:
                    await task
            if in_flight:
                await asyncio.gather(*in_flight)
        except BaseException:
            for task in in_flight:
                task.cancel()
            await asyncio.gather(*in_flight, return_exceptions=True)
            raise

        result = self._recorder.result()
        logger.info(
            "Run finished: %d signed job(s), %d failed build(s)",
            len(result.signed_jobs),
            len(result.failed_jobs),
        )
        return result

    def _register(self, job: TransactionJob) -> bool:
        """Create the job's slots; return False when it will not be dispatched."""
        if not job.signed:
            self._recorder.record_failed_job(job)
            return False
        try:
            self._recorder.register_job(job)
        except SlotError as exc:
            # same blockhash and amount as an earlier job
            logger.warning("Job %d skipped: %s", job.sequence_index, exc)
            self._recorder.record_failed_job(
                TransactionJob.failed(
                    job.sequence_index,
                    amount=job.amount,
                    build_start=job.build_start,
                    build_end=job.build_end,
                    reason=f"duplicate signature {job.signature}",
                )
            )
            return False
        return True

    async def _track(self, job: TransactionJob) -> None:
        outcomes = await self._dispatcher.dispatch(job)
        listeners = [
            self._listener.await_confirmation(job, endpoint, outcomes[endpoint.name])
            for endpoint in self._endpoints
            if outcomes[endpoint.name].status is OutcomeStatus.SUBMITTED
        ]
        if listeners:
            await asyncio.gather(*listeners)

        statuses = [outcomes[endpoint.name].status.value for endpoint in self._endpoints]
        logger.info("Job %s resolved: %s", job.signature, ", ".join(statuses))


async def run_benchmark(
    config: BenchmarkConfig,
    *,
    transport: RpcTransport | None = None,
    subscriber: SignatureSubscriber | None = None,
    signer: TransferSigner | None = None,
    clock: Callable[[], float] | None = None,
) -> RunResult:
    """Run one benchmark and return the raw per-job, per-endpoint outcomes.

    Args:
        config: Validated before any network call.
        transport: RPC collaborator; defaults to an HttpRpcTransport with a
            worker pool sized for the endpoints, closed when the run ends.
        subscriber: Subscription collaborator; defaults to WebSocketSubscriber.
        signer: Signing collaborator; defaults to Ed25519TransferSigner.
        clock: Monotonic clock in seconds; defaults to time.perf_counter.

    Raises:
        ConfigurationError: If the configuration is invalid.
    """
    validate_config(config)

    owns_transport = transport is None
    if transport is None:
        transport = HttpRpcTransport.for_endpoints(config.endpoints)
    run = BenchmarkRun(
        config,
        transport=transport,
        subscriber=subscriber or WebSocketSubscriber(),
        signer=signer or Ed25519TransferSigner(),
        clock=clock or time.perf_counter,
    )
    try:
        return await run.run()
    finally:
        if owns_transport:
            transport.close()


__all__ = ["BenchmarkRun", "run_benchmark"]
