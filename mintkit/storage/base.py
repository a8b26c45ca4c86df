from abc import ABC, abstractmethod


class BaseStorageUploader(ABC):
    """Contract for all content-addressable storage adapters."""

    @abstractmethod
    def upload(self, content: bytes, *, name: str, mime_type: str) -> str:
        """Submit one blob tagged with its content type.

        Args:
            content: Raw bytes to store.
            name: Logical file name attached to the upload.
            mime_type: Content type tag.

        Returns:
            URI that resolves to exactly the submitted bytes.

        Raises:
            UploadError: if the service rejects the upload or cannot be reached.
        """

    def close(self) -> None:
        """Release network resources held by the adapter."""
