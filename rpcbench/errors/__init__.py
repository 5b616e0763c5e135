"""Centralized exception classes for the benchmark.

Organization:
    - configuration.py: invalid run parameters (fatal before the run)
    - signing.py: per-iteration build/sign failures
    - rpc.py: per-endpoint submission and subscription failures
    - state.py: outcome state machine and recorder slot violations
    - classify.py: exception-to-label mapping
"""

from .state import SlotError, OutcomeTransitionError
from .rpc import SubmissionError, SubscriptionError
from .configuration import ConfigurationError
from .signing import SigningError, UnavailableError
from .classify import classify_error, describe_error

__all__ = [
    # Configuration
    "ConfigurationError",
    # Signing
    "SigningError",
    "UnavailableError",
    # RPC
    "SubmissionError",
    "SubscriptionError",
    # State
    "OutcomeTransitionError",
    "SlotError",
    # Classification
    "classify_error",
    "describe_error",
]
