"""Sentry error tracking with per-class rate-limiting.

Only errors outside the expected taxonomy are reported: endpoint failures,
time-outs and rejected transactions are benchmark data, not incidents.
"""

from __future__ import annotations

import time
import logging
from typing import Any

from ..logging import current_log_context
from ..config.telemetry import (
    SENTRY_DSN,
    SENTRY_RELEASE,
    SENTRY_ENVIRONMENT,
    SENTRY_SAMPLE_RATE,
    SENTRY_RATE_LIMIT_S,
    SENTRY_TAG_JOB_ID,
    SENTRY_TAG_ENDPOINT,
)

logger = logging.getLogger(__name__)

_error_timestamps: dict[str, float] = {}
_initialized: bool = False


def init_sentry(dsn: str | None = None) -> bool:
    """Initialize Sentry SDK when a DSN is configured. Idempotent.

    Returns True when Sentry is active after the call.
    """
    global _initialized  # noqa: PLW0603
    if _initialized:
        return True
    resolved_dsn = dsn or SENTRY_DSN
    if not resolved_dsn:
        logger.info("Sentry disabled (SENTRY_DSN not set)")
        return False

    import sentry_sdk

    kwargs: dict[str, Any] = {
        "dsn": resolved_dsn,
        "environment": SENTRY_ENVIRONMENT,
        "traces_sample_rate": 0.0,
        "sample_rate": SENTRY_SAMPLE_RATE,
        "attach_stacktrace": True,
    }
    if SENTRY_RELEASE:
        kwargs["release"] = SENTRY_RELEASE

    sentry_sdk.init(**kwargs)
    _initialized = True
    logger.info("Sentry initialized: environment=%s", SENTRY_ENVIRONMENT)
    return True


def shutdown_sentry() -> None:
    """Flush Sentry events. Idempotent."""
    global _initialized  # noqa: PLW0603
    if not _initialized:
        return
    import sentry_sdk

    sentry_sdk.flush(timeout=2.0)
    _initialized = False


def capture_error(
    error: BaseException,
    *,
    extra: dict[str, Any] | None = None,
) -> bool:
    """Report an error to Sentry with rate-limiting per error class.

    Returns True when the event was handed to the SDK.
    """
    if not _initialized:
        return False

    key = type(error).__qualname__
    now = time.monotonic()
    last = _error_timestamps.get(key)
    if last is not None and (now - last) < SENTRY_RATE_LIMIT_S:
        return False
    _error_timestamps[key] = now

    import sentry_sdk

    context = current_log_context()
    with sentry_sdk.new_scope() as scope:
        scope.set_tag(SENTRY_TAG_JOB_ID, context["job_id"])
        scope.set_tag(SENTRY_TAG_ENDPOINT, context["endpoint"])
        if extra:
            for k, v in extra.items():
                scope.set_extra(k, v)
        sentry_sdk.capture_exception(error)
    return True


__all__ = ["init_sentry", "shutdown_sentry", "capture_error"]
