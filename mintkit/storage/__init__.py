from mintkit.storage.base import BaseStorageUploader
from mintkit.storage.factory import StorageUploaderFactory
from mintkit.storage.file_uploader import FileUploader

__all__ = ["BaseStorageUploader", "FileUploader", "StorageUploaderFactory"]
