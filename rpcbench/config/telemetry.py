"""Telemetry configuration: Sentry env vars and tags."""

import os

SENTRY_DSN: str = os.getenv("SENTRY_DSN", "")
SENTRY_ENVIRONMENT: str = os.getenv("SENTRY_ENVIRONMENT", "benchmark")
SENTRY_RELEASE: str = os.getenv("SENTRY_RELEASE", "")
SENTRY_SAMPLE_RATE: float = float(os.getenv("SENTRY_SAMPLE_RATE", "1.0"))

# Minimum seconds between two reports of the same exception class
SENTRY_RATE_LIMIT_S: float = 10.0
SENTRY_TAG_JOB_ID = "job_id"
SENTRY_TAG_ENDPOINT = "endpoint"


__all__ = [
    "SENTRY_DSN",
    "SENTRY_ENVIRONMENT",
    "SENTRY_RELEASE",
    "SENTRY_SAMPLE_RATE",
    "SENTRY_RATE_LIMIT_S",
    "SENTRY_TAG_JOB_ID",
    "SENTRY_TAG_ENDPOINT",
]
