from dataclasses import dataclass
from pathlib import Path

from solders.keypair import Keypair
from solders.pubkey import Pubkey


@dataclass(frozen=True)
class Identity:
    """Signing keypair shared by every upload and mint call of one run."""

    keypair: Keypair
    source_path: Path | None = None

    @property
    def pubkey(self) -> Pubkey:
        return self.keypair.pubkey()

    @property
    def address(self) -> str:
        return str(self.keypair.pubkey())
