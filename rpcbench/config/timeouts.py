"""Timeout configuration for the benchmark pipeline.

Values are sourced from environment variables with sensible defaults.
All values are in seconds.
"""

import os


# HTTP sendTransaction call (per endpoint, per job)
SEND_TIMEOUT_S = float(os.getenv("SEND_TIMEOUT_S", "10"))

# HTTP getLatestBlockhash call on the reference endpoint
FETCH_TIMEOUT_S = float(os.getenv("FETCH_TIMEOUT_S", "10"))

# Per-listener wait for the terminal signature notification
CONFIRM_TIMEOUT_S = float(os.getenv("CONFIRM_TIMEOUT_S", "60"))

# Wait for the signatureSubscribe acknowledgement frame
SUBSCRIBE_ACK_TIMEOUT_S = float(os.getenv("SUBSCRIBE_ACK_TIMEOUT_S", "10"))


__all__ = [
    "SEND_TIMEOUT_S",
    "FETCH_TIMEOUT_S",
    "CONFIRM_TIMEOUT_S",
    "SUBSCRIBE_ACK_TIMEOUT_S",
]
