"""Endpoint-scoped RPC exceptions.

These never abort a run. The dispatcher and listener convert them into
recorded outcomes for the affected (job, endpoint) pair.
"""

from __future__ import annotations


class SubmissionError(Exception):
    """Raised when an endpoint fails or rejects sendTransaction.

    Attributes:
        reason: Short description recorded on the SEND_ERROR outcome.
        code: JSON-RPC error code, when the node returned one.
    """

    def __init__(self, reason: str, *, code: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.code = code


class SubscriptionError(Exception):
    """Raised when a signature subscription cannot be opened."""


__all__ = ["SubmissionError", "SubscriptionError"]
