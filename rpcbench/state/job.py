"""Transaction job dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SignedTransfer:
    """Output of the signing collaborator: wire bytes plus signature id."""

    payload: bytes
    signature: str


@dataclass(frozen=True, slots=True)
class TransactionJob:
    """One logical transfer benchmarked as a unit.

    A job whose build failed carries ``signing_error`` and no signature; it
    never enters endpoint fan-out.

    Attributes:
        sequence_index: Position in the batch (0..N-1), defines report order.
        signature: Base58 transaction signature, the join key for outcomes.
        payload: Signed wire bytes sent unchanged to every endpoint.
        amount: Lamports transferred by this job.
        block_reference: Recent blockhash the transaction was signed against.
        build_start: Clock value when the build started.
        build_end: Clock value when signing finished (or failed).
        signing_error: Failure reason when the iteration could not be signed.
    """

    sequence_index: int
    signature: str | None
    payload: bytes
    amount: int
    block_reference: str | None
    build_start: float
    build_end: float
    signing_error: str | None = None

    @property
    def signed(self) -> bool:
        return self.signing_error is None and self.signature is not None

    @property
    def build_latency_s(self) -> float:
        return self.build_end - self.build_start

    @classmethod
    def failed(
        cls,
        sequence_index: int,
        *,
        amount: int,
        build_start: float,
        build_end: float,
        reason: str,
    ) -> "TransactionJob":
        """Build the record for an iteration that could not be signed."""
        return cls(
            sequence_index=sequence_index,
            signature=None,
            payload=b"",
            amount=amount,
            block_reference=None,
            build_start=build_start,
            build_end=build_end,
            signing_error=reason,
        )


__all__ = ["SignedTransfer", "TransactionJob"]
