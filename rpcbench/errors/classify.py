"""Exception classification helpers for outcome reasons and log labels."""

from __future__ import annotations

import asyncio

from .configuration import ConfigurationError
from .signing import SigningError, UnavailableError
from .rpc import SubmissionError, SubscriptionError

ERROR_CATEGORIES: tuple[tuple[type[BaseException], str], ...] = (
    (ConfigurationError, "configuration"),
    (SigningError, "signing"),
    (UnavailableError, "unavailable"),
    (SubmissionError, "submission"),
    (SubscriptionError, "subscription"),
    (asyncio.TimeoutError, "timeout"),
    (TimeoutError, "timeout"),
    (ConnectionError, "connection"),
    (OSError, "connection"),
)


def classify_error(exc: BaseException) -> str:
    """Map an exception to a short category label."""

    for cls, label in ERROR_CATEGORIES:
        if isinstance(exc, cls):
            return label
    return "unknown"


def describe_error(exc: BaseException) -> str:
    """Render ``label: message`` for recording on an outcome."""

    message = str(exc) or type(exc).__name__
    return f"{classify_error(exc)}: {message}"


__all__ = ["ERROR_CATEGORIES", "classify_error", "describe_error"]
