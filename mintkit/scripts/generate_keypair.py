"""Generate the wallet keypair file every other script reads."""

from mintkit.config.settings import Settings
from mintkit.identity.loader import generate_keypair_file
from mintkit.logging.logger import Log
from mintkit.scripts.runner import run_script

TIPS = ("Delete or move the existing keypair file to generate a new one",)


def main() -> int:
    settings = Settings()
    Log.configure(settings.log_level)

    def _generate() -> None:
        identity = generate_keypair_file(settings.keypair_path)
        Log.info(f"New wallet address: {identity.address}")
        Log.info(f"Secret key saved to {settings.keypair_path}")
        Log.warning("Keep the keypair file private and out of version control")

    return run_script(_generate, TIPS)


if __name__ == "__main__":
    raise SystemExit(main())
