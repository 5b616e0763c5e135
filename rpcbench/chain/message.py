"""Legacy Solana transaction encoding for a single system transfer.

Wire layout of the signed transaction:

    shortvec(signature count) | signatures (64 bytes each) | message

and of the message:

    header (3 bytes) | shortvec(account count) | account keys (32 bytes each)
    | recent blockhash (32 bytes) | shortvec(instruction count) | instructions

Each instruction is ``program id index | shortvec(account indexes) |
shortvec(data length) | data``. The transfer data is the little-endian u32
instruction discriminant followed by the little-endian u64 lamports.
"""

from __future__ import annotations

import struct

from ..config.chain import (
    ADDRESS_LENGTH,
    SYSTEM_PROGRAM_ID,
    SYSTEM_TRANSFER_INDEX,
    HEADER_READONLY_SIGNED,
    HEADER_READONLY_UNSIGNED,
    HEADER_REQUIRED_SIGNATURES,
)

_SHORTVEC_MAX = 0xFFFF


def encode_shortvec(value: int) -> bytes:
    """Encode a length as Solana's compact-u16 (7 bits per byte, LSB first)."""
    if value < 0 or value > _SHORTVEC_MAX:
        raise ValueError(f"shortvec value out of range: {value}")
    out = bytearray()
    remaining = value
    while True:
        byte = remaining & 0x7F
        remaining >>= 7
        if remaining:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def encode_transfer_instruction_data(lamports: int) -> bytes:
    return struct.pack("<IQ", SYSTEM_TRANSFER_INDEX, lamports)


def encode_transfer_message(
    sender: bytes,
    recipient: bytes,
    lamports: int,
    blockhash: bytes,
) -> bytes:
    """Serialize the unsigned legacy message for ``sender -> recipient``.

    A self-transfer lists the sender once and references it twice.
    """
    for label, key in (("sender", sender), ("recipient", recipient), ("blockhash", blockhash)):
        if len(key) != ADDRESS_LENGTH:
            raise ValueError(f"{label} must be {ADDRESS_LENGTH} bytes")

    if sender == recipient:
        account_keys = [sender, SYSTEM_PROGRAM_ID]
        account_indexes = bytes([0, 0])
    else:
        account_keys = [sender, recipient, SYSTEM_PROGRAM_ID]
        account_indexes = bytes([0, 1])
    program_index = len(account_keys) - 1
    data = encode_transfer_instruction_data(lamports)

    message = bytearray(
        [HEADER_REQUIRED_SIGNATURES, HEADER_READONLY_SIGNED, HEADER_READONLY_UNSIGNED]
    )
    message += encode_shortvec(len(account_keys))
    for key in account_keys:
        message += key
    message += blockhash
    message += encode_shortvec(1)
    message.append(program_index)
    message += encode_shortvec(len(account_indexes))
    message += account_indexes
    message += encode_shortvec(len(data))
    message += data
    return bytes(message)


def encode_signed_transaction(signature: bytes, message: bytes) -> bytes:
    return encode_shortvec(1) + signature + message


__all__ = [
    "encode_shortvec",
    "encode_signed_transaction",
    "encode_transfer_instruction_data",
    "encode_transfer_message",
]
