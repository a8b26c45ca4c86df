"""Mint a single-image NFT."""

from mintkit.config.settings import Settings
from mintkit.logging.logger import Log
from mintkit.pipeline.models import MintRequest
from mintkit.scripts.runner import asset_file, mint_with_settings, run_script

IMAGE_PATH = "images/sample.jpg"
NFT_NAME = "My First NFT"
DESCRIPTION = "A digital artwork stored on content-addressed storage and minted on Solana."
ATTRIBUTES = [
    ("Artist", "Digital Creator"),
    ("Style", "Digital Art"),
    ("Rarity", "Unique"),
    ("Year", "2025"),
]


def build_request(settings: Settings) -> MintRequest:
    return MintRequest(
        name=NFT_NAME,
        description=DESCRIPTION,
        files=[asset_file(settings, IMAGE_PATH, role="image")],
        attributes=ATTRIBUTES,
    )


def main() -> int:
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info("Starting image NFT minting")
    return run_script(lambda: mint_with_settings(settings, build_request(settings)))


if __name__ == "__main__":
    raise SystemExit(main())
