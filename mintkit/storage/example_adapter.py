"""Example storage adapter.

Use this module as a reference when implementing new storage adapters.
Implement BaseStorageUploader and register the provider in StorageUploaderFactory.
"""

import hashlib

from mintkit.storage.base import BaseStorageUploader


class ExampleStorageAdapter(BaseStorageUploader):
    """Offline adapter that derives the URI from the content hash.

    No network calls. Useful for dry runs and tests: the same bytes always
    produce the same URI, and every upload is kept in memory.
    """

    SCHEME = "example://"

    def __init__(self) -> None:
        self.uploads: dict[str, tuple[str, str, bytes]] = {}

    def upload(self, content: bytes, *, name: str, mime_type: str) -> str:
        uri = f"{self.SCHEME}{hashlib.sha256(content).hexdigest()}"
        self.uploads[uri] = (name, mime_type, content)
        return uri
