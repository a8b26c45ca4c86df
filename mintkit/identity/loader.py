"""Reads and writes Solana CLI style keypair files (JSON array of 64 bytes)."""

import json
from pathlib import Path
from typing import Any

from solders.keypair import Keypair

from mintkit.identity.exceptions import IdentityLoadError
from mintkit.identity.models import Identity
from mintkit.logging.logger import Log

SECRET_KEY_LENGTH = 64


def load_identity(path: Path | str) -> Identity:
    """Load a signing identity from a keypair file.

    Raises:
        IdentityLoadError: if the file is missing, unreadable, or does not
            hold exactly 64 byte values accepted as an ed25519 keypair.
    """
    key_path = Path(path)
    if not key_path.exists():
        raise IdentityLoadError(f"Keypair file not found: {key_path}")
    try:
        raw = json.loads(key_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise IdentityLoadError(f"Cannot read keypair file {key_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise IdentityLoadError(f"Keypair file {key_path} is not valid JSON: {exc}") from exc

    secret = _secret_bytes(raw, key_path)
    try:
        keypair = Keypair.from_bytes(secret)
    except ValueError as exc:
        raise IdentityLoadError(f"Keypair file {key_path} holds an invalid key: {exc}") from exc

    identity = Identity(keypair=keypair, source_path=key_path)
    Log.info(f"Loaded wallet {identity.address} from {key_path}")
    return identity


def generate_keypair_file(path: Path | str, overwrite: bool = False) -> Identity:
    """Create a new keypair and persist its secret bytes as a JSON array.

    Raises:
        IdentityLoadError: if the file exists and overwrite is False.
    """
    key_path = Path(path)
    if key_path.exists() and not overwrite:
        raise IdentityLoadError(f"Keypair file already exists: {key_path}")
    keypair = Keypair()
    key_path.parent.mkdir(parents=True, exist_ok=True)
    key_path.write_text(json.dumps(list(bytes(keypair))), encoding="utf-8")
    Log.info(f"Wrote new keypair for {keypair.pubkey()} to {key_path}")
    return Identity(keypair=keypair, source_path=key_path)


def _secret_bytes(raw: Any, key_path: Path) -> bytes:
    if not isinstance(raw, list):
        raise IdentityLoadError(f"Keypair file {key_path} must contain a JSON array")
    if len(raw) != SECRET_KEY_LENGTH:
        raise IdentityLoadError(
            f"Keypair file {key_path} holds {len(raw)} bytes, expected {SECRET_KEY_LENGTH}"
        )
    for i, value in enumerate(raw):
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
            raise IdentityLoadError(
                f"Keypair file {key_path}: item {i} is not a byte value: {value!r}"
            )
    return bytes(raw)
