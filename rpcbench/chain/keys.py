"""Ed25519 keypair handling and address validation.

Keypair files use the Solana CLI layout: a JSON array of 64 integers, the
32-byte secret seed followed by the 32-byte public key.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import base58
from nacl.signing import SigningKey
from nacl.exceptions import CryptoError

from ..errors import SigningError, ConfigurationError
from ..config.chain import ADDRESS_LENGTH, KEYPAIR_FILE_LENGTH


def decode_address(address: str) -> bytes:
    """Decode a base58 address into its 32 raw bytes.

    Raises:
        ConfigurationError: If the string is not base58 or not 32 bytes long.
    """
    if not isinstance(address, str) or not address:
        raise ConfigurationError("invalid_address", "address must be a non-empty base58 string")
    try:
        raw = base58.b58decode(address)
    except ValueError as exc:
        raise ConfigurationError("invalid_address", f"address {address!r} is not base58") from exc
    if len(raw) != ADDRESS_LENGTH:
        raise ConfigurationError(
            "invalid_address",
            f"address {address!r} decodes to {len(raw)} bytes, expected {ADDRESS_LENGTH}",
        )
    return raw


def is_valid_address(address: str) -> bool:
    try:
        decode_address(address)
    except ConfigurationError:
        return False
    return True


def encode_address(raw: bytes) -> str:
    return base58.b58encode(raw).decode("ascii")


class Keypair:
    """Ed25519 signing keypair for the transfer sender."""

    def __init__(self, signing_key: SigningKey) -> None:
        self._signing_key = signing_key
        self._public_bytes = bytes(signing_key.verify_key)

    @classmethod
    def generate(cls) -> "Keypair":
        return cls(SigningKey.generate())

    @classmethod
    def from_seed(cls, seed: bytes) -> "Keypair":
        if len(seed) != ADDRESS_LENGTH:
            raise ConfigurationError("invalid_keypair", f"seed must be {ADDRESS_LENGTH} bytes")
        return cls(SigningKey(seed))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Keypair":
        """Build from the 64-byte seed + public key layout, checking both halves agree."""
        if len(data) != KEYPAIR_FILE_LENGTH:
            raise ConfigurationError(
                "invalid_keypair",
                f"keypair must be {KEYPAIR_FILE_LENGTH} bytes, got {len(data)}",
            )
        keypair = cls.from_seed(bytes(data[:ADDRESS_LENGTH]))
        if keypair.public_bytes != bytes(data[ADDRESS_LENGTH:]):
            raise ConfigurationError("invalid_keypair", "public key does not match secret seed")
        return keypair

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "Keypair":
        """Load a Solana CLI JSON keypair file."""
        file_path = Path(path)
        try:
            values = json.loads(file_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError("keypair_unreadable", f"cannot read keypair {file_path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError("invalid_keypair", f"keypair {file_path} is not JSON") from exc
        if not isinstance(values, list) or not all(isinstance(v, int) and 0 <= v <= 255 for v in values):
            raise ConfigurationError("invalid_keypair", f"keypair {file_path} must be a JSON byte array")
        return cls.from_bytes(bytes(values))

    @property
    def public_bytes(self) -> bytes:
        return self._public_bytes

    @property
    def pubkey(self) -> str:
        return encode_address(self._public_bytes)

    def to_bytes(self) -> bytes:
        return bytes(self._signing_key) + self._public_bytes

    def to_json(self) -> str:
        return json.dumps(list(self.to_bytes()))

    def sign(self, message: bytes) -> bytes:
        """Return the detached 64-byte ed25519 signature of message."""
        try:
            return self._signing_key.sign(message).signature
        except CryptoError as exc:
            raise SigningError(f"ed25519 signing failed: {exc}") from exc

    def __repr__(self) -> str:
        return f"Keypair(pubkey={self.pubkey})"


__all__ = ["Keypair", "decode_address", "encode_address", "is_valid_address"]
