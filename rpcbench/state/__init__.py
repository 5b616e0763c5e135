"""Centralized state dataclasses for the benchmark.

This module re-exports all state definitions from their respective modules,
providing a single import point for state types.
"""

from .endpoint import Endpoint
from .run import JobRecord, RunResult
from .job import SignedTransfer, TransactionJob
from .notification import TerminalNotification
from .config import BenchmarkConfig, FailureScorePolicy
from .outcome import TERMINAL_STATUSES, OutcomeStatus, EndpointOutcome
from .report import JobScores, RankingEntry, EndpointSummary, BenchmarkReport

__all__ = [
    "BenchmarkConfig",
    "BenchmarkReport",
    "Endpoint",
    "EndpointOutcome",
    "EndpointSummary",
    "FailureScorePolicy",
    "JobRecord",
    "JobScores",
    "OutcomeStatus",
    "RankingEntry",
    "RunResult",
    "SignedTransfer",
    "TERMINAL_STATUSES",
    "TerminalNotification",
    "TransactionJob",
]
