"""Public telemetry API: re-exports for convenience."""

from .sentry import init_sentry, capture_error, shutdown_sentry

__all__ = [
    "init_sentry",
    "shutdown_sentry",
    "capture_error",
]
