"""Mint an audio NFT with cover art."""

from mintkit.config.settings import Settings
from mintkit.logging.logger import Log
from mintkit.pipeline.models import MintRequest
from mintkit.scripts.runner import asset_file, mint_with_settings, run_script

AUDIO_PATH = "audio/sample.mp3"
COVER_PATH = "images/cover.jpg"
NFT_NAME = "My Music NFT"
ARTIST = "Digital Musician"
ALBUM = "Blockchain Beats"
GENRE = "Electronic"
YEAR = "2025"
DURATION = "3:45"
DESCRIPTION = "A beautiful piece of music stored on the blockchain"
ATTRIBUTES = [
    ("Type", "Audio NFT"),
    ("Format", "MP3"),
    ("Artist", ARTIST),
    ("Album", ALBUM),
    ("Year", YEAR),
]


def build_request(settings: Settings) -> MintRequest:
    return MintRequest(
        name=NFT_NAME,
        description=DESCRIPTION,
        files=[
            asset_file(settings, AUDIO_PATH, name="audio.mp3", role="audio"),
            asset_file(settings, COVER_PATH, name="cover.jpg", role="image"),
        ],
        attributes=ATTRIBUTES,
        category="audio",
        animation_role="audio",
        external_role="audio",
        extra={
            "audio": {
                "artist": ARTIST,
                "album": ALBUM,
                "genre": GENRE,
                "duration": DURATION,
                "year": YEAR,
            }
        },
        cdn=False,
    )


def main() -> int:
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info("Starting audio NFT minting")
    return run_script(lambda: mint_with_settings(settings, build_request(settings)))


if __name__ == "__main__":
    raise SystemExit(main())
