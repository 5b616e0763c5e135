"""Abstract collaborator interfaces consumed by the pipeline.

The pipeline only talks to these base classes; the default implementations
live next to them (HTTP JSON-RPC, WebSocket subscriptions, ed25519 signing)
and tests substitute in-memory fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..state import Endpoint, SignedTransfer, TerminalNotification

if TYPE_CHECKING:
    from ..chain.keys import Keypair


class TransferSigner(ABC):
    """Builds and signs one transfer transaction."""

    @abstractmethod
    def sign_transfer(
        self,
        sender: "Keypair",
        recipient: str,
        amount: int,
        block_reference: str,
    ) -> SignedTransfer:
        """Return the signed wire bytes and signature id.

        Raises:
            SigningError: If the transaction cannot be built or signed.
        """


class RpcTransport(ABC):
    """Request/response access to an endpoint's HTTP JSON-RPC interface."""

    @abstractmethod
    async def submit(self, endpoint: Endpoint, payload: bytes) -> str:
        """Send a signed transaction and return the acknowledged signature.

        Raises:
            SubmissionError: If the call fails or the node rejects it.
        """

    @abstractmethod
    async def fetch_block_reference(self, endpoint: Endpoint) -> str:
        """Return a recent blockhash.

        Raises:
            UnavailableError: If no blockhash could be obtained.
        """

    def close(self) -> None:
        """Release pooled connections."""


class SubscriptionHandle(ABC):
    """One open signature subscription."""

    @abstractmethod
    async def next_notification(self) -> TerminalNotification | None:
        """Wait for the terminal notification; None if the stream ended first."""

    @abstractmethod
    async def unsubscribe(self) -> None:
        """Cancel the subscription and release the connection. Idempotent."""


class SignatureSubscriber(ABC):
    """Opens push-notification subscriptions for transaction signatures."""

    @abstractmethod
    async def subscribe(
        self,
        endpoint: Endpoint,
        signature: str,
        level: str,
    ) -> SubscriptionHandle:
        """Open a subscription for signature at the given commitment level.

        Raises:
            SubscriptionError: If the subscription could not be established.
        """


__all__ = [
    "RpcTransport",
    "SignatureSubscriber",
    "SubscriptionHandle",
    "TransferSigner",
]
