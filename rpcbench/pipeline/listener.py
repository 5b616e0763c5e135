"""Confirmation listener: one terminal notification per (job, endpoint).

The remote side sends exactly one notification per signature subscription
and then drops the subscription, so the listener never resubscribes. The
wait races an independent per-listener timer; when the timer wins the
subscription is explicitly unsubscribed and the outcome becomes TIMED_OUT.
Only the timer produces TIMED_OUT: a timeout error raised by the
subscription itself is a FAILED outcome like any other listener error.
Unsubscribe runs on every exit path and is idempotent, so a notification
that already closed the subscription remotely costs nothing.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from ..logging import log_context
from ..telemetry import capture_error
from ..errors import SubscriptionError, OutcomeTransitionError, describe_error
from ..rpc.base import SignatureSubscriber, SubscriptionHandle
from ..state import Endpoint, OutcomeStatus, EndpointOutcome, TransactionJob, TerminalNotification
from .recorder import TimingRecorder

logger = logging.getLogger(__name__)


class ConfirmationListener:
    """Resolves SUBMITTED outcomes to SUCCESS, FAILED or TIMED_OUT."""

    def __init__(
        self,
        *,
        subscriber: SignatureSubscriber,
        recorder: TimingRecorder,
        timeout_s: float,
        commitment: str,
        clock: Callable[[], float],
    ) -> None:
        self._subscriber = subscriber
        self._recorder = recorder
        self._timeout_s = timeout_s
        self._commitment = commitment
        self._clock = clock

    async def await_confirmation(
        self,
        job: TransactionJob,
        endpoint: Endpoint,
        outcome: EndpointOutcome,
    ) -> EndpointOutcome:
        """Track one submitted outcome to a terminal state and publish it."""
        if outcome.status is not OutcomeStatus.SUBMITTED:
            raise OutcomeTransitionError(f"cannot listen for {outcome.key} in state {outcome.status.value}")

        handles: list[SubscriptionHandle] = []
        with log_context(endpoint=endpoint.name):
            try:
                listened = await self._listen_until_deadline(job, endpoint, handles)
            except SubscriptionError as exc:
                outcome.mark_failed(self._clock(), f"subscription_failed: {exc}")
                logger.warning("Subscription failed: %s", exc)
            except Exception as exc:  # noqa: BLE001
                outcome.mark_failed(self._clock(), describe_error(exc))
                logger.exception("Unexpected listener error")
                capture_error(exc, extra={"signature": job.signature})
            else:
                if listened is None:
                    outcome.mark_timed_out(self._clock())
                    logger.info("No notification within %.1fs", self._timeout_s)
                else:
                    self._resolve(outcome, *listened)
            finally:
                for handle in handles:
                    await handle.unsubscribe()

        self._recorder.publish(outcome)
        return outcome

    async def _listen_until_deadline(
        self,
        job: TransactionJob,
        endpoint: Endpoint,
        handles: list[SubscriptionHandle],
    ) -> tuple[TerminalNotification | None, float] | None:
        """Race the listen against the per-listener timer.

        Returns None when the timer wins. Errors raised by the listen itself,
        including a TimeoutError from the transport, propagate unchanged.
        """
        task = asyncio.ensure_future(self._listen(job, endpoint, handles))
        try:
            done, _ = await asyncio.wait({task}, timeout=self._timeout_s)
        except BaseException:
            task.cancel()
            raise
        if not done:
            task.cancel()
            await asyncio.wait({task})
            return None
        return task.result()

    async def _listen(
        self,
        job: TransactionJob,
        endpoint: Endpoint,
        handles: list[SubscriptionHandle],
    ) -> tuple[TerminalNotification | None, float]:
        handle = await self._subscriber.subscribe(endpoint, job.signature, self._commitment)
        handles.append(handle)
        notification = await handle.next_notification()
        return notification, self._clock()

    def _resolve(
        self,
        outcome: EndpointOutcome,
        notification: TerminalNotification | None,
        observed_at: float,
    ) -> None:
        if notification is None:
            # stream ended without a notification
            outcome.mark_timed_out(observed_at)
            logger.info("Subscription stream ended without a notification")
            return
        outcome.mark_confirmed(observed_at, error=notification.error, slot=notification.slot)
        if notification.error:
            logger.warning("Finalized with error at slot %s: %s", notification.slot, notification.error)
        else:
            logger.info(
                "Confirmed at slot %s in %.1f ms",
                notification.slot,
                outcome.confirm_latency_s * 1000.0,
            )


__all__ = ["ConfirmationListener"]
