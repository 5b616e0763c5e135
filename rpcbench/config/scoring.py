"""Scoring policy defaults.

FAILURE_SCORE_MODE selects how endpoints that did not confirm a job are
scored for that job:

    endpoint_count      sentinel = number of configured endpoints
    successes_plus_one  sentinel = successful endpoints in the job + 1
    fixed               sentinel = FAILURE_SCORE_FIXED (never below the
                        slowest successful rank)

TIMED_OUT_PENALTY is added on top of the sentinel for time-outs only.
"""

import os


FAILURE_SCORE_MODES = ("endpoint_count", "successes_plus_one", "fixed")

FAILURE_SCORE_MODE = os.getenv("FAILURE_SCORE_MODE", "endpoint_count")
FAILURE_SCORE_FIXED = int(os.getenv("FAILURE_SCORE_FIXED", "0"))
TIMED_OUT_PENALTY = int(os.getenv("TIMED_OUT_PENALTY", "0"))


__all__ = [
    "FAILURE_SCORE_MODES",
    "FAILURE_SCORE_MODE",
    "FAILURE_SCORE_FIXED",
    "TIMED_OUT_PENALTY",
]
