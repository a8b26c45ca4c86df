from mintkit.config.settings import Settings
from mintkit.storage.base import BaseStorageUploader
from mintkit.storage.example_adapter import ExampleStorageAdapter
from mintkit.storage.pinata_adapter import PinataStorageAdapter


class StorageUploaderFactory:
    """Creates the configured storage adapter."""

    PROVIDERS = ("example", "pinata")

    @classmethod
    def create(cls, settings: Settings) -> BaseStorageUploader:
        """Create a storage adapter from application settings."""
        provider = settings.storage_provider.lower()
        if provider == "example":
            return ExampleStorageAdapter()
        if provider == "pinata":
            if not settings.pinata_api_key or not settings.pinata_secret_api_key:
                raise ValueError(
                    "pinata_api_key and pinata_secret_api_key are required for "
                    "storage_provider=pinata"
                )
            return PinataStorageAdapter(
                api_key=settings.pinata_api_key,
                secret_api_key=settings.pinata_secret_api_key,
                base_url=settings.pinata_base_url,
                gateway_url=settings.storage_gateway_url,
                timeout_seconds=settings.storage_timeout_seconds,
            )
        raise ValueError(
            f"Unknown storage provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
