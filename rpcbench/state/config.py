"""Benchmark configuration dataclasses.

BenchmarkConfig is the single input of run_benchmark. It is built either
programmatically or by rpcbench.helpers.config_file from a JSON file, and
validated by rpcbench.helpers.validation before the run starts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from dataclasses import field, dataclass

from .endpoint import Endpoint
from ..config.rpc import DEFAULT_COMMITMENT
from ..config.timeouts import CONFIRM_TIMEOUT_S
from ..config.scoring import FAILURE_SCORE_MODE, FAILURE_SCORE_FIXED, TIMED_OUT_PENALTY

if TYPE_CHECKING:
    from ..chain.keys import Keypair


@dataclass(frozen=True, slots=True)
class FailureScorePolicy:
    """How endpoints without a successful confirmation are scored per job.

    Attributes:
        mode: One of "endpoint_count", "successes_plus_one" or "fixed".
        fixed_value: Sentinel used by the "fixed" mode.
        timed_out_penalty: Extra points added for TIMED_OUT outcomes only.
    """

    mode: str = FAILURE_SCORE_MODE
    fixed_value: int = FAILURE_SCORE_FIXED
    timed_out_penalty: int = TIMED_OUT_PENALTY


@dataclass(frozen=True)
class BenchmarkConfig:
    """Configuration for a benchmark run.

    Attributes:
        sender: Keypair paying for every transfer.
        recipient: Base58 recipient address.
        amount: Lamports per transfer.
        num_transactions: Batch size N.
        endpoints: Endpoints under test, in report order.
        reference_endpoint_index: Endpoint that supplies block references.
        confirmation_timeout_s: Per-listener wait for the notification.
        failure_policy: Scoring policy for non-successful outcomes.
        commitment: Subscription commitment level.
        pipeline_jobs: Start building job i+1 before job i is confirmed.
        vary_amount: Add the sequence index to the amount so signatures
            stay distinct when consecutive jobs share a blockhash.
    """

    sender: "Keypair"
    recipient: str
    amount: int
    num_transactions: int
    endpoints: tuple[Endpoint, ...]
    reference_endpoint_index: int = 0
    confirmation_timeout_s: float = CONFIRM_TIMEOUT_S
    failure_policy: FailureScorePolicy = field(default_factory=FailureScorePolicy)
    commitment: str = DEFAULT_COMMITMENT
    pipeline_jobs: bool = True
    vary_amount: bool = True

    @property
    def reference_endpoint(self) -> Endpoint:
        return self.endpoints[self.reference_endpoint_index]

    def amount_for(self, sequence_index: int) -> int:
        if self.vary_amount:
            return self.amount + sequence_index
        return self.amount


__all__ = ["BenchmarkConfig", "FailureScorePolicy"]
