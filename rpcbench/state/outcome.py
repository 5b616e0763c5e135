"""Per-endpoint outcome state machine.

An EndpointOutcome moves through:

    PENDING ──send ok──▶ SUBMITTED ──notification, err empty──▶ SUCCESS
       │                     ├──────notification, err set────▶ FAILED
       │                     └──────no notification──────────▶ TIMED_OUT
       └──send failed──▶ SEND_ERROR

SUCCESS, FAILED, TIMED_OUT and SEND_ERROR are terminal. Each timestamp is
captured exactly once by the task that owns the outcome, and
``send_start <= send_ack <= confirm_at`` is checked on every transition.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass

from ..errors import OutcomeTransitionError


class OutcomeStatus(str, Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    SUCCESS = "success"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    SEND_ERROR = "send_error"

    @property
    def terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {
        OutcomeStatus.SUCCESS,
        OutcomeStatus.FAILED,
        OutcomeStatus.TIMED_OUT,
        OutcomeStatus.SEND_ERROR,
    }
)

_ALLOWED_TRANSITIONS: dict[OutcomeStatus, frozenset[OutcomeStatus]] = {
    OutcomeStatus.PENDING: frozenset({OutcomeStatus.SUBMITTED, OutcomeStatus.SEND_ERROR}),
    OutcomeStatus.SUBMITTED: frozenset(
        {OutcomeStatus.SUCCESS, OutcomeStatus.FAILED, OutcomeStatus.TIMED_OUT}
    ),
}


@dataclass
class EndpointOutcome:
    """One endpoint's observed behavior for one job.

    Attributes:
        endpoint_name: Endpoint half of the composite key.
        job_signature: Job half of the composite key.
        send_start: Clock value right before the submit call.
        send_ack: Clock value when the submit call returned (or failed).
        confirm_at: Clock value when the terminal notification was observed;
            None unless a notification arrived.
        resolved_at: Clock value when the terminal state was observed,
            including time-outs and send errors.
        status: Current state.
        reason: Failure reason for FAILED and SEND_ERROR.
        slot: Slot reported alongside the notification, when any.
    """

    endpoint_name: str
    job_signature: str
    send_start: float | None = None
    send_ack: float | None = None
    confirm_at: float | None = None
    resolved_at: float | None = None
    status: OutcomeStatus = OutcomeStatus.PENDING
    reason: str | None = None
    slot: int | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.job_signature, self.endpoint_name)

    @property
    def terminal(self) -> bool:
        return self.status.terminal

    @property
    def send_latency_s(self) -> float | None:
        if self.send_start is None or self.send_ack is None:
            return None
        return self.send_ack - self.send_start

    @property
    def confirm_latency_s(self) -> float | None:
        """Listener-observed latency from send start to terminal notification."""
        if self.status is not OutcomeStatus.SUCCESS or self.send_start is None or self.confirm_at is None:
            return None
        return self.confirm_at - self.send_start

    def begin_send(self, at: float) -> None:
        if self.status is not OutcomeStatus.PENDING or self.send_start is not None:
            raise OutcomeTransitionError(f"send already started for {self.key}")
        self.send_start = at

    def mark_submitted(self, at: float) -> None:
        self._check(OutcomeStatus.SUBMITTED)
        self._ack(at)
        self.status = OutcomeStatus.SUBMITTED

    def mark_send_error(self, at: float, reason: str) -> None:
        self._check(OutcomeStatus.SEND_ERROR)
        self._ack(at)
        self.reason = reason
        self.resolved_at = at
        self.status = OutcomeStatus.SEND_ERROR

    def mark_confirmed(self, at: float, *, error: str | None = None, slot: int | None = None) -> None:
        """Record the terminal notification: SUCCESS when error is empty."""
        target = OutcomeStatus.FAILED if error else OutcomeStatus.SUCCESS
        self._check(target)
        self._check_order(self.send_ack, at, "confirm_at")
        self.confirm_at = at
        self.resolved_at = at
        self.slot = slot
        if error:
            self.reason = error
        self.status = target

    def mark_failed(self, at: float, reason: str) -> None:
        """Record a listener-side failure with no notification timestamp."""
        self._check(OutcomeStatus.FAILED)
        self._check_order(self.send_ack, at, "resolved_at")
        self.reason = reason
        self.resolved_at = at
        self.status = OutcomeStatus.FAILED

    def mark_timed_out(self, at: float) -> None:
        self._check(OutcomeStatus.TIMED_OUT)
        self._check_order(self.send_ack, at, "resolved_at")
        self.resolved_at = at
        self.status = OutcomeStatus.TIMED_OUT

    def _ack(self, at: float) -> None:
        if self.send_start is None:
            raise OutcomeTransitionError(f"send never started for {self.key}")
        if self.send_ack is not None:
            raise OutcomeTransitionError(f"send already acknowledged for {self.key}")
        self._check_order(self.send_start, at, "send_ack")
        self.send_ack = at

    def _check(self, target: OutcomeStatus) -> None:
        allowed = _ALLOWED_TRANSITIONS.get(self.status, frozenset())
        if target not in allowed:
            raise OutcomeTransitionError(
                f"illegal transition {self.status.value} -> {target.value} for {self.key}"
            )

    def _check_order(self, earlier: float | None, later: float, label: str) -> None:
        if earlier is not None and later < earlier:
            raise OutcomeTransitionError(f"{label} precedes previous stage for {self.key}")


__all__ = ["EndpointOutcome", "OutcomeStatus", "TERMINAL_STATUSES"]
