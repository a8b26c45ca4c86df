import json
from collections.abc import Callable
from pathlib import Path

import pytest
from solders.keypair import Keypair

from mintkit.identity.models import Identity
from tests.fakes import FakeClock


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def identity() -> Identity:
    return Identity(keypair=Keypair())


@pytest.fixture()
def keypair_file(tmp_path: Path) -> tuple[Path, Keypair]:
    """Write a valid keypair file in the Solana CLI format."""
    keypair = Keypair()
    path = tmp_path / "solana-keypair.json"
    path.write_text(json.dumps(list(bytes(keypair))))
    return path, keypair


@pytest.fixture()
def make_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Create a file under tmp_path with the given relative name and content."""

    def _make(relative: str, content: bytes = b"0123456789") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make
