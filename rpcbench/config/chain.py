"""Solana wire-format constants for the system transfer instruction."""

from __future__ import annotations

# All-zero 32-byte key, base58 "11111111111111111111111111111111"
SYSTEM_PROGRAM_ID = bytes(32)
SYSTEM_TRANSFER_INDEX = 2  # SystemInstruction::Transfer discriminant

ADDRESS_LENGTH = 32
SIGNATURE_LENGTH = 64
KEYPAIR_FILE_LENGTH = 64  # 32-byte seed followed by the 32-byte public key

MIN_LAMPORTS = 1
MAX_LAMPORTS = 2**64 - 1

# Legacy message header for a single-signer transfer
HEADER_REQUIRED_SIGNATURES = 1
HEADER_READONLY_SIGNED = 0
HEADER_READONLY_UNSIGNED = 1  # the system program


__all__ = [
    "SYSTEM_PROGRAM_ID",
    "SYSTEM_TRANSFER_INDEX",
    "ADDRESS_LENGTH",
    "SIGNATURE_LENGTH",
    "KEYPAIR_FILE_LENGTH",
    "MIN_LAMPORTS",
    "MAX_LAMPORTS",
    "HEADER_REQUIRED_SIGNATURES",
    "HEADER_READONLY_SIGNED",
    "HEADER_READONLY_UNSIGNED",
]
