import json

import httpx

from mintkit.logging.logger import Log
from mintkit.storage.base import BaseStorageUploader
from mintkit.storage.exceptions import UploadError


class PinataStorageAdapter(BaseStorageUploader):
    """Pins blobs to IPFS through the Pinata HTTP API."""

    PIN_FILE_ENDPOINT = "/pinning/pinFileToIPFS"

    def __init__(
        self,
        *,
        api_key: str,
        secret_api_key: str,
        base_url: str,
        gateway_url: str,
        timeout_seconds: int,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._gateway_url = gateway_url.rstrip("/")
        self._client = httpx.Client(
            base_url=base_url,
            headers={
                "pinata_api_key": api_key,
                "pinata_secret_api_key": secret_api_key,
            },
            timeout=timeout_seconds,
            transport=transport,
        )

    def upload(self, content: bytes, *, name: str, mime_type: str) -> str:
        files = {"file": (name, content, mime_type)}
        metadata = {"name": name, "keyvalues": {"content_type": mime_type}}
        try:
            response = self._client.post(
                self.PIN_FILE_ENDPOINT,
                files=files,
                data={"pinataMetadata": json.dumps(metadata)},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UploadError(
                f"Storage service rejected {name}: HTTP {exc.response.status_code} "
                f"{exc.response.text[:200]}"
            ) from exc
        except httpx.HTTPError as exc:
            raise UploadError(f"Storage service unreachable while uploading {name}: {exc}") from exc

        try:
            cid = response.json()["IpfsHash"]
        except (ValueError, KeyError, TypeError) as exc:
            raise UploadError(f"Storage service returned no content hash for {name}") from exc
        if not isinstance(cid, str) or not cid:
            raise UploadError(f"Storage service returned no content hash for {name}")

        Log.debug(f"Pinned {name} ({len(content)} bytes) as {cid}")
        return f"{self._gateway_url}/{cid}"

    def close(self) -> None:
        self._client.close()
