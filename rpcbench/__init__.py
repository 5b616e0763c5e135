"""rpcbench: confirmation-latency benchmark for Solana RPC endpoints."""

from .scoring import score
from .pipeline import run_benchmark
from .errors import (
    SlotError,
    SigningError,
    SubmissionError,
    UnavailableError,
    SubscriptionError,
    ConfigurationError,
    OutcomeTransitionError,
)
from .state import (
    Endpoint,
    RunResult,
    JobRecord,
    OutcomeStatus,
    TransactionJob,
    BenchmarkConfig,
    BenchmarkReport,
    EndpointOutcome,
    FailureScorePolicy,
)

__version__ = "0.1.0"

__all__ = [
    "BenchmarkConfig",
    "BenchmarkReport",
    "ConfigurationError",
    "Endpoint",
    "EndpointOutcome",
    "FailureScorePolicy",
    "JobRecord",
    "OutcomeStatus",
    "OutcomeTransitionError",
    "RunResult",
    "SigningError",
    "SlotError",
    "SubmissionError",
    "SubscriptionError",
    "TransactionJob",
    "UnavailableError",
    "run_benchmark",
    "score",
]
