"""State-machine and slot ownership exceptions.

Both indicate a programming error in the pipeline rather than an endpoint
or chain failure.
"""


class OutcomeTransitionError(RuntimeError):
    """Raised on an illegal EndpointOutcome status transition."""


class SlotError(RuntimeError):
    """Raised when a recorder slot is unknown, duplicated or published twice."""


__all__ = ["OutcomeTransitionError", "SlotError"]
