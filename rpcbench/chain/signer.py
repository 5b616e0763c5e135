"""Ed25519 transfer signer, the default signing collaborator."""

from __future__ import annotations

import base58

from .keys import Keypair, decode_address
from .message import encode_signed_transaction, encode_transfer_message
from ..rpc.base import TransferSigner
from ..state import SignedTransfer
from ..errors import SigningError, ConfigurationError
from ..config.chain import ADDRESS_LENGTH, MAX_LAMPORTS, MIN_LAMPORTS


class Ed25519TransferSigner(TransferSigner):
    """Builds and signs a legacy system transfer with the sender's keypair."""

    def sign_transfer(
        self,
        sender: Keypair,
        recipient: str,
        amount: int,
        block_reference: str,
    ) -> SignedTransfer:
        if not MIN_LAMPORTS <= amount <= MAX_LAMPORTS:
            raise SigningError(f"amount {amount} outside lamport range")
        try:
            recipient_bytes = decode_address(recipient)
        except ConfigurationError as exc:
            raise SigningError(exc.message) from exc
        try:
            blockhash = base58.b58decode(block_reference)
        except ValueError as exc:
            raise SigningError(f"block reference {block_reference!r} is not base58") from exc
        if len(blockhash) != ADDRESS_LENGTH:
            raise SigningError(f"block reference {block_reference!r} is not a 32-byte hash")

        message = encode_transfer_message(sender.public_bytes, recipient_bytes, amount, blockhash)
        signature = sender.sign(message)
        return SignedTransfer(
            payload=encode_signed_transaction(signature, message),
            signature=base58.b58encode(signature).decode("ascii"),
        )


__all__ = ["Ed25519TransferSigner"]
