from pathlib import Path

from mintkit.logging.logger import Log
from mintkit.pipeline.models import LocalFile, UploadedAsset
from mintkit.storage.base import BaseStorageUploader
from mintkit.storage.mime import detect_mime_type


def local_file(
    path: Path | str,
    name: str | None = None,
    mime_type: str | None = None,
    role: str = "image",
    category: str | None = None,
) -> LocalFile:
    """Declare a LocalFile, filling name and content type from the path."""
    file_path = Path(path)
    return LocalFile(
        path=file_path,
        name=name or file_path.name,
        mime_type=mime_type or detect_mime_type(file_path),
        role=role,
        category=category,
    )


class FileUploader:
    """Reads local files and submits their bytes to the storage adapter."""

    def __init__(self, storage: BaseStorageUploader) -> None:
        self._storage = storage

    def upload_file(
        self,
        path: Path | str,
        name: str | None = None,
        mime_type: str | None = None,
    ) -> UploadedAsset:
        """Upload one file; name and content type are derived when omitted.

        Raises:
            FileNotFoundError: if the path does not exist.
            UploadError: if the storage service fails.
        """
        return self.upload_local_file(local_file(path, name=name, mime_type=mime_type))

    def upload_local_file(self, source: LocalFile) -> UploadedAsset:
        if not source.path.is_file():
            raise FileNotFoundError(f"File not found: {source.path}")
        content = source.path.read_bytes()
        Log.info("Uploading", name=source.name, mime_type=source.mime_type, size=len(content))
        uri = self._storage.upload(content, name=source.name, mime_type=source.mime_type)
        Log.info("Uploaded", name=source.name, uri=uri)
        return UploadedAsset(uri=uri, source=source, size_bytes=len(content))

    def upload_bytes(self, content: bytes, *, name: str, mime_type: str) -> str:
        """Upload in-memory content through the same storage adapter."""
        Log.info("Uploading", name=name, mime_type=mime_type, size=len(content))
        uri = self._storage.upload(content, name=name, mime_type=mime_type)
        Log.info("Uploaded", name=name, uri=uri)
        return uri
