"""Mint a mixed media NFT: cover image, interactive HTML page and audio track."""

from mintkit.config.settings import Settings
from mintkit.logging.logger import Log
from mintkit.pipeline.models import MintRequest
from mintkit.scripts.runner import asset_file, mint_with_settings, run_script

COVER_PATH = "images/cover.jpg"
HTML_PATH = "other/love-letter.html"
AUDIO_PATH = "audio/love-track.mp3"
NFT_NAME = "Love Letter with Music"
DESCRIPTION = (
    "A mixed media NFT containing a personal audio track, custom cover art "
    "and an interactive HTML love letter."
)
ATTRIBUTES = [
    ("Type", "Mixed Media"),
    ("Audio", "MP3"),
    ("Visual", "JPEG + HTML"),
    ("Components", "3"),
]
STORAGE_LABELS = {"pinata": "IPFS via Pinata", "example": "offline example store"}
TIPS = (
    "Ensure the cover, HTML and audio files exist in the assets/ folders",
    "Check your SOL balance for transaction fees",
    "Large files may need multiple attempts",
)


def build_request(settings: Settings) -> MintRequest:
    # upload order: smallest first
    return MintRequest(
        name=NFT_NAME,
        description=DESCRIPTION,
        files=[
            asset_file(settings, COVER_PATH, role="image", category="cover"),
            asset_file(settings, HTML_PATH, role="html", category="interactive"),
            asset_file(settings, AUDIO_PATH, role="audio", category="audio"),
        ],
        attributes=ATTRIBUTES,
        category="mixed",
        animation_role="audio",
        external_role="html",
        extra={
            "tags": ["mixed-media", "audio", "interactive"],
            "technical": {
                "standard": "Metaplex Core",
                "storage": STORAGE_LABELS.get(settings.storage_provider, settings.storage_provider),
                "blockchain": "Solana",
            },
        },
        media_roles={
            "cover_image": "image",
            "audio_track": "audio",
            "interactive_content": "html",
        },
        cdn=False,
    )


def main() -> int:
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info("Starting mixed media NFT minting")
    return run_script(lambda: mint_with_settings(settings, build_request(settings)), TIPS)


if __name__ == "__main__":
    raise SystemExit(main())
