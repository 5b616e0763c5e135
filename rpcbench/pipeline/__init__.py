"""Benchmark pipeline: factory -> dispatcher -> listener -> recorder."""

from .factory import TransactionFactory
from .dispatcher import Dispatcher
from .listener import ConfirmationListener
from .recorder import TimingRecorder
from .orchestrator import BenchmarkRun, run_benchmark

__all__ = [
    "BenchmarkRun",
    "ConfirmationListener",
    "Dispatcher",
    "TimingRecorder",
    "TransactionFactory",
    "run_benchmark",
]
