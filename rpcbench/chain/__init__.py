"""Signing collaborator: keypairs, transfer encoding and signing."""

from .signer import Ed25519TransferSigner
from .keys import Keypair, decode_address, encode_address, is_valid_address
from .message import encode_shortvec, encode_transfer_message, encode_signed_transaction

__all__ = [
    "Ed25519TransferSigner",
    "Keypair",
    "decode_address",
    "encode_address",
    "encode_shortvec",
    "encode_signed_transaction",
    "encode_transfer_message",
    "is_valid_address",
]
