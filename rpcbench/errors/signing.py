"""Transaction build and signing exceptions.

Both are scoped to a single iteration: the orchestrator records the job as
failed and moves on to the next one.
"""


class SigningError(Exception):
    """Raised when a transfer transaction cannot be built or signed."""


class UnavailableError(Exception):
    """Raised when the reference endpoint cannot supply a recent blockhash.

    The factory escalates this to SigningError for the iteration: without a
    block reference there is no transaction to send.
    """


__all__ = ["SigningError", "UnavailableError"]
