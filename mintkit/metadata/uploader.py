import json

from mintkit.metadata.models import MetadataDocument
from mintkit.storage.file_uploader import FileUploader

METADATA_MIME_TYPE = "application/json"


def canonical_json(document: MetadataDocument) -> bytes:
    """Serialize with sorted keys and no insignificant whitespace."""
    return json.dumps(
        document.to_dict(),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")


class MetadataUploader:
    """Publishes a MetadataDocument through the file upload mechanism."""

    def __init__(self, file_uploader: FileUploader) -> None:
        self._file_uploader = file_uploader

    def upload(self, document: MetadataDocument, name: str = "metadata.json") -> str:
        """Upload the document as application/json and return its URI.

        Raises:
            UploadError: if the storage service fails.
        """
        return self._file_uploader.upload_bytes(
            canonical_json(document),
            name=name,
            mime_type=METADATA_MIME_TYPE,
        )
