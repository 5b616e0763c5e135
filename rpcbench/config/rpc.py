"""JSON-RPC protocol configuration values.

Method names:
    The Solana JSON-RPC methods used by the HTTP transport and the
    WebSocket subscriber.

Commitment:
    DEFAULT_COMMITMENT is the level requested for signature subscriptions.
    "finalized" is the strictest level the cluster reports and the only one
    after which a notification is terminal.

    BLOCKHASH_COMMITMENT is used when fetching the recent blockhash that
    every transaction is signed against.

Submission:
    SEND_SKIP_PREFLIGHT skips the node-side simulation so the measurement
    covers propagation only. SEND_MAX_RETRIES=0 disables node-side
    rebroadcasting; resubmission would distort the latency being measured.

HTTP worker pool:
    Blocking HTTP calls run on a pool owned by the transport.
    HTTP_WORKERS_PER_ENDPOINT threads per endpoint cover the submissions of
    overlapping pipelined jobs. HTTP_MAX_WORKERS sizes a transport built
    without an endpoint list.
"""

from __future__ import annotations

import os

from ..helpers.env import env_flag

# ============================================================================
# JSON-RPC Methods
# ============================================================================

JSONRPC_VERSION = "2.0"
METHOD_GET_LATEST_BLOCKHASH = "getLatestBlockhash"
METHOD_SEND_TRANSACTION = "sendTransaction"
METHOD_SIGNATURE_SUBSCRIBE = "signatureSubscribe"
METHOD_SIGNATURE_UNSUBSCRIBE = "signatureUnsubscribe"
METHOD_SIGNATURE_NOTIFICATION = "signatureNotification"

# ============================================================================
# Commitment Levels
# ============================================================================

COMMITMENT_LEVELS = ("processed", "confirmed", "finalized")
DEFAULT_COMMITMENT = os.getenv("RPC_COMMITMENT", "finalized")
BLOCKHASH_COMMITMENT = os.getenv("RPC_BLOCKHASH_COMMITMENT", "finalized")

# ============================================================================
# Submission
# ============================================================================

SEND_SKIP_PREFLIGHT = env_flag("SEND_SKIP_PREFLIGHT", True)
SEND_MAX_RETRIES = int(os.getenv("SEND_MAX_RETRIES", "0"))

# ============================================================================
# HTTP Worker Pool
# ============================================================================

HTTP_WORKERS_PER_ENDPOINT = int(os.getenv("HTTP_WORKERS_PER_ENDPOINT", "2"))
HTTP_MAX_WORKERS = int(os.getenv("HTTP_MAX_WORKERS", "32"))  # transports built without an endpoint list

# ============================================================================
# WebSocket
# ============================================================================

WS_MAX_QUEUE = None  # unbounded; one subscription per connection
WS_CLOSE_TIMEOUT_S = float(os.getenv("WS_CLOSE_TIMEOUT_S", "2"))


__all__ = [
    "JSONRPC_VERSION",
    "METHOD_GET_LATEST_BLOCKHASH",
    "METHOD_SEND_TRANSACTION",
    "METHOD_SIGNATURE_SUBSCRIBE",
    "METHOD_SIGNATURE_UNSUBSCRIBE",
    "METHOD_SIGNATURE_NOTIFICATION",
    "COMMITMENT_LEVELS",
    "DEFAULT_COMMITMENT",
    "BLOCKHASH_COMMITMENT",
    "SEND_SKIP_PREFLIGHT",
    "SEND_MAX_RETRIES",
    "HTTP_WORKERS_PER_ENDPOINT",
    "HTTP_MAX_WORKERS",
    "WS_MAX_QUEUE",
    "WS_CLOSE_TIMEOUT_S",
]
