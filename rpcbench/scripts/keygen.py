"""Generate a sender keypair in the Solana CLI file layout.

Writes ``.private_key`` (JSON array of 64 bytes) and ``.public_key``
(base58 address) into the target directory.
"""

from __future__ import annotations

import sys
import logging
import argparse
from pathlib import Path

from rpcbench.chain import Keypair
from rpcbench.logging import configure_logging

logger = logging.getLogger("rpcbench.scripts.keygen")

PRIVATE_KEY_FILENAME = ".private_key"
PUBLIC_KEY_FILENAME = ".public_key"


def write_keypair(directory: Path, keypair: Keypair, *, overwrite: bool = False) -> tuple[Path, Path]:
    """Write both key files; refuse to clobber an existing private key."""
    directory.mkdir(parents=True, exist_ok=True)
    private_path = directory / PRIVATE_KEY_FILENAME
    public_path = directory / PUBLIC_KEY_FILENAME
    if private_path.exists() and not overwrite:
        raise FileExistsError(f"{private_path} already exists (pass --force to overwrite)")
    private_path.write_text(keypair.to_json(), encoding="utf-8")
    private_path.chmod(0o600)
    public_path.write_text(keypair.pubkey, encoding="utf-8")
    return private_path, public_path


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Generate a benchmark sender keypair")
    p.add_argument("--output-dir", "-o", default=".", help="where to write the key files")
    p.add_argument("--force", action="store_true", help="overwrite an existing .private_key")
    args = p.parse_args(argv)
    configure_logging()

    keypair = Keypair.generate()
    try:
        write_keypair(Path(args.output_dir), keypair, overwrite=args.force)
    except FileExistsError as exc:
        logger.error("%s", exc)
        return 1
    print(
        f"Generated keypair to {PRIVATE_KEY_FILENAME} and {PUBLIC_KEY_FILENAME}, public key: {keypair.pubkey}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
