class StorageError(Exception):
    """Base exception for all storage-related errors."""


class UploadError(StorageError):
    """Raised when the storage service does not accept an upload."""
