"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- timeouts: send, fetch, subscribe and confirmation timeouts
- rpc: JSON-RPC methods, commitment levels, submission flags
- scoring: failure score policy defaults
- chain: transfer wire-format constants
- logging / telemetry: log format and Sentry settings

Functions live in rpcbench/helpers/.
"""

from .timeouts import (
    SEND_TIMEOUT_S,
    FETCH_TIMEOUT_S,
    CONFIRM_TIMEOUT_S,
    SUBSCRIBE_ACK_TIMEOUT_S,
)
from .rpc import (
    COMMITMENT_LEVELS,
    DEFAULT_COMMITMENT,
    BLOCKHASH_COMMITMENT,
    SEND_SKIP_PREFLIGHT,
    SEND_MAX_RETRIES,
)
from .scoring import (
    FAILURE_SCORE_MODES,
    FAILURE_SCORE_MODE,
    FAILURE_SCORE_FIXED,
    TIMED_OUT_PENALTY,
)
from .chain import (
    ADDRESS_LENGTH,
    MIN_LAMPORTS,
    MAX_LAMPORTS,
)

__all__ = [
    "SEND_TIMEOUT_S",
    "FETCH_TIMEOUT_S",
    "CONFIRM_TIMEOUT_S",
    "SUBSCRIBE_ACK_TIMEOUT_S",
    "COMMITMENT_LEVELS",
    "DEFAULT_COMMITMENT",
    "BLOCKHASH_COMMITMENT",
    "SEND_SKIP_PREFLIGHT",
    "SEND_MAX_RETRIES",
    "FAILURE_SCORE_MODES",
    "FAILURE_SCORE_MODE",
    "FAILURE_SCORE_FIXED",
    "TIMED_OUT_PENALTY",
    "ADDRESS_LENGTH",
    "MIN_LAMPORTS",
    "MAX_LAMPORTS",
]
