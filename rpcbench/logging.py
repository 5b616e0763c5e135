"""Logging context helpers for consistent structured fields.

Every log line carries the job (sequence index) and endpoint name of the
task that emitted it, so interleaved output from concurrent dispatch and
listener tasks stays attributable.
"""

from __future__ import annotations

import logging
import contextlib
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import Token, ContextVar

_JOB_ID: ContextVar[str] = ContextVar("job_id", default="-")
_ENDPOINT: ContextVar[str] = ContextVar("endpoint", default="-")


def set_log_context(
    *,
    job_id: str | None = None,
    endpoint: str | None = None,
) -> list[tuple[ContextVar[str], Token[str]]]:
    """Set log context values and return tokens for reset."""
    tokens: list[tuple[ContextVar[str], Token[str]]] = []
    if job_id is not None:
        tokens.append((_JOB_ID, _JOB_ID.set(job_id)))
    if endpoint is not None:
        tokens.append((_ENDPOINT, _ENDPOINT.set(endpoint)))
    return tokens


def reset_log_context(tokens: list[tuple[ContextVar[str], Token[str]]]) -> None:
    """Reset log context values using tokens returned by set_log_context."""
    for var, token in reversed(tokens):
        var.reset(token)


@contextmanager
def log_context(
    *,
    job_id: str | None = None,
    endpoint: str | None = None,
) -> Iterator[None]:
    """Context manager for applying log fields within a block."""
    tokens = set_log_context(job_id=job_id, endpoint=endpoint)
    try:
        yield
    finally:
        reset_log_context(tokens)


def current_log_context() -> dict[str, str]:
    """Return the active context fields."""
    return {"job_id": _JOB_ID.get(), "endpoint": _ENDPOINT.get()}


def install_log_context() -> None:
    """Install a LogRecord factory that injects context fields."""
    if getattr(install_log_context, "_installed", False):
        return

    old_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = old_factory(*args, **kwargs)
        record.job_id = _JOB_ID.get()
        record.endpoint = _ENDPOINT.get()
        return record

    logging.setLogRecordFactory(record_factory)
    install_log_context._installed = True  # type: ignore[attr-defined]


def configure_logging(level: str | None = None) -> None:
    """Initialize root logging configuration once per process."""
    from rpcbench.config.logging import APP_LOG_LEVEL, APP_LOG_FORMAT, APP_LOG_DATEFMT  # noqa: PLC0415

    resolved_level = (level or APP_LOG_LEVEL).upper()
    install_log_context()
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=resolved_level, format=APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT)
    else:
        root_logger.setLevel(resolved_level)
        for handler in root_logger.handlers:
            with contextlib.suppress(Exception):
                handler.setLevel(resolved_level)
                handler.setFormatter(logging.Formatter(APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT))

    logging.getLogger("rpcbench").setLevel(resolved_level)
    # websockets logs every frame at DEBUG
    logging.getLogger("websockets").setLevel("INFO" if resolved_level == "DEBUG" else resolved_level)


__all__ = [
    "current_log_context",
    "install_log_context",
    "log_context",
    "reset_log_context",
    "set_log_context",
    "configure_logging",
]
