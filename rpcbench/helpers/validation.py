"""Validation helpers for benchmark configuration.

Everything here runs before the first network call. Any failure raises
ConfigurationError and the run never starts.
"""

from __future__ import annotations

from urllib.parse import urlparse

from ..chain.keys import Keypair, decode_address
from ..config.rpc import COMMITMENT_LEVELS
from ..config.scoring import FAILURE_SCORE_MODES
from ..config.chain import MIN_LAMPORTS, MAX_LAMPORTS
from ..errors import ConfigurationError
from ..state import Endpoint, BenchmarkConfig, FailureScorePolicy

_HTTP_SCHEMES = ("http", "https")
_WS_SCHEMES = ("ws", "wss")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_url(url: object, schemes: tuple[str, ...], label: str, name: str) -> None:
    if not isinstance(url, str) or not url:
        raise ConfigurationError("invalid_endpoint_url", f"endpoint {name!r}: {label} is required")
    parsed = urlparse(url)
    if parsed.scheme not in schemes or not parsed.netloc:
        raise ConfigurationError(
            "invalid_endpoint_url",
            f"endpoint {name!r}: {label} {url!r} must use one of {', '.join(schemes)}",
        )


def validate_endpoints(endpoints: tuple[Endpoint, ...] | list[Endpoint]) -> None:
    """Ensure a non-empty list of uniquely named endpoints with valid URLs."""
    if not endpoints:
        raise ConfigurationError("no_endpoints", "at least one RPC endpoint is required")
    seen: set[str] = set()
    for endpoint in endpoints:
        if not isinstance(endpoint, Endpoint):
            raise ConfigurationError("invalid_endpoint", f"expected Endpoint, got {type(endpoint).__name__}")
        if not endpoint.name:
            raise ConfigurationError("invalid_endpoint", "endpoint name must be non-empty")
        if endpoint.name in seen:
            raise ConfigurationError("duplicate_endpoint", f"endpoint name {endpoint.name!r} is used twice")
        seen.add(endpoint.name)
        _check_url(endpoint.http_url, _HTTP_SCHEMES, "http_url", endpoint.name)
        _check_url(endpoint.ws_url, _WS_SCHEMES, "ws_url", endpoint.name)


def validate_amount(config: BenchmarkConfig) -> None:
    """Ensure every per-job amount fits an unsigned 64-bit lamport count."""
    if not _is_int(config.amount) or config.amount < MIN_LAMPORTS:
        raise ConfigurationError("invalid_amount", f"amount must be a positive integer, got {config.amount!r}")
    largest = config.amount_for(config.num_transactions - 1)
    if largest > MAX_LAMPORTS:
        raise ConfigurationError("invalid_amount", f"amount {largest} exceeds {MAX_LAMPORTS} lamports")


def validate_failure_policy(policy: FailureScorePolicy) -> None:
    if not isinstance(policy, FailureScorePolicy):
        raise ConfigurationError("invalid_failure_policy", "failure_policy must be a FailureScorePolicy")
    if policy.mode not in FAILURE_SCORE_MODES:
        raise ConfigurationError(
            "invalid_failure_policy",
            f"unknown failure score mode {policy.mode!r}; expected one of {', '.join(FAILURE_SCORE_MODES)}",
        )
    if not _is_int(policy.fixed_value) or policy.fixed_value < 0:
        raise ConfigurationError("invalid_failure_policy", "fixed_value must be a non-negative integer")
    if not _is_int(policy.timed_out_penalty) or policy.timed_out_penalty < 0:
        raise ConfigurationError("invalid_failure_policy", "timed_out_penalty must be a non-negative integer")


def validate_config(config: BenchmarkConfig) -> None:
    """Validate a BenchmarkConfig before any network call.

    Raises:
        ConfigurationError: With an ``error_code`` naming the first
            offending field.
    """
    if not isinstance(config.sender, Keypair):
        raise ConfigurationError("invalid_sender", "sender must be a Keypair")
    decode_address(config.recipient)

    if not _is_int(config.num_transactions) or config.num_transactions < 1:
        raise ConfigurationError(
            "invalid_num_transactions",
            f"num_transactions must be a positive integer, got {config.num_transactions!r}",
        )
    validate_amount(config)
    validate_endpoints(config.endpoints)

    index = config.reference_endpoint_index
    if not _is_int(index) or not 0 <= index < len(config.endpoints):
        raise ConfigurationError(
            "invalid_reference_endpoint",
            f"reference_endpoint_index {index!r} is out of range for {len(config.endpoints)} endpoints",
        )

    timeout = config.confirmation_timeout_s
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigurationError("invalid_timeout", f"confirmation timeout must be positive, got {timeout!r}")

    if config.commitment not in COMMITMENT_LEVELS:
        raise ConfigurationError(
            "invalid_commitment",
            f"commitment {config.commitment!r} is not one of {', '.join(COMMITMENT_LEVELS)}",
        )
    validate_failure_policy(config.failure_policy)


__all__ = [
    "validate_config",
    "validate_endpoints",
    "validate_amount",
    "validate_failure_policy",
]
