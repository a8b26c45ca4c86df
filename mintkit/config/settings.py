from typing import ClassVar

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    NETWORK_RPC_URLS: ClassVar[dict[str, str]] = {
        "mainnet": "https://api.mainnet-beta.solana.com",
        "devnet": "https://api.devnet.solana.com",
    }

    app_env: str = "dev"
    log_level: str = "INFO"

    network: str = "mainnet"
    solana_rpc_url: str = ""
    commitment: str = "confirmed"
    keypair_path: str = "solana-keypair.json"
    assets_root: str = "assets"

    storage_provider: str = "pinata"
    pinata_api_key: str = ""
    pinata_secret_api_key: str = ""
    pinata_base_url: str = "https://api.pinata.cloud"
    storage_gateway_url: str = "https://gateway.pinata.cloud/ipfs"
    storage_timeout_seconds: int = 120
    upload_delay_seconds: float = 1.0

    rpc_timeout_seconds: int = 30
    confirmation_timeout_seconds: int = 90
    confirmation_poll_interval_seconds: float = 2.0
    blockhash_max_age_seconds: int = 60

    explorer_url: str = "https://explorer.solana.com"
    asset_viewer_url: str = "https://core.metaplex.com/explorer"

    def is_devnet(self) -> bool:
        return self.network.lower() == "devnet"

    def resolved_rpc_url(self) -> str:
        """Explicit RPC URL if set, otherwise the public endpoint of the network."""
        if self.solana_rpc_url:
            return self.solana_rpc_url
        network = self.network.lower()
        url = self.NETWORK_RPC_URLS.get(network)
        if url is None:
            raise ValueError(
                f"Unknown network '{network}'. Choose from: {list(self.NETWORK_RPC_URLS)}"
            )
        return url
