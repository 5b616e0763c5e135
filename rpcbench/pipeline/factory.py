"""Transaction factory: one freshly referenced, signed transfer per iteration."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..state import Endpoint, TransactionJob
from ..chain.keys import Keypair
from ..telemetry import capture_error
from ..rpc.base import RpcTransport, TransferSigner
from ..errors import SigningError, UnavailableError, describe_error

logger = logging.getLogger(__name__)


class TransactionFactory:
    """Builds TransactionJobs for a fixed sender, recipient and amount.

    Each build fetches a new blockhash from the reference endpoint right
    before signing so that no job is signed against a stale reference.
    """

    def __init__(
        self,
        *,
        signer: TransferSigner,
        transport: RpcTransport,
        reference_endpoint: Endpoint,
        sender: Keypair,
        recipient: str,
        amount_for: Callable[[int], int],
        clock: Callable[[], float],
    ) -> None:
        self._signer = signer
        self._transport = transport
        self._reference_endpoint = reference_endpoint
        self._sender = sender
        self._recipient = recipient
        self._amount_for = amount_for
        self._clock = clock

    async def build(self, sequence_index: int) -> TransactionJob:
        """Build job ``sequence_index``.

        Failures are scoped to this iteration: the returned job carries
        ``signing_error`` instead of a signature and the run continues.
        """
        amount = self._amount_for(sequence_index)
        build_start = self._clock()
        try:
            block_reference, signed = await self._sign(amount)
        except SigningError as exc:
            logger.warning("Job %d not signed: %s", sequence_index, exc)
            return self._failed(sequence_index, amount, build_start, str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error while building job %d", sequence_index)
            capture_error(exc, extra={"sequence_index": sequence_index})
            return self._failed(sequence_index, amount, build_start, describe_error(exc))

        build_end = self._clock()
        logger.debug("Signed %s against %s", signed.signature, block_reference)
        return TransactionJob(
            sequence_index=sequence_index,
            signature=signed.signature,
            payload=signed.payload,
            amount=amount,
            block_reference=block_reference,
            build_start=build_start,
            build_end=build_end,
        )

    async def _sign(self, amount: int):
        try:
            block_reference = await self._transport.fetch_block_reference(self._reference_endpoint)
        except UnavailableError as exc:
            raise SigningError(f"no block reference: {exc}") from exc
        signed = self._signer.sign_transfer(self._sender, self._recipient, amount, block_reference)
        return block_reference, signed

    def _failed(self, sequence_index: int, amount: int, build_start: float, reason: str) -> TransactionJob:
        return TransactionJob.failed(
            sequence_index,
            amount=amount,
            build_start=build_start,
            build_end=self._clock(),
            reason=reason,
        )


__all__ = ["TransactionFactory"]
