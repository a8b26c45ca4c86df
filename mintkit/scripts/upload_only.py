"""Upload files to storage without minting."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from mintkit.config.settings import Settings
from mintkit.logging.logger import Log
from mintkit.pipeline.models import UploadedAsset
from mintkit.scripts.runner import run_script
from mintkit.storage.exceptions import UploadError
from mintkit.storage.factory import StorageUploaderFactory
from mintkit.storage.file_uploader import FileUploader

FILES_TO_UPLOAD = [
    "images/sample.jpg",
    "audio/sample.mp3",
]


@dataclass
class UploadSummary:
    uploaded: list[UploadedAsset] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)
    missing: list[Path] = field(default_factory=list)


def upload_files(
    file_uploader: FileUploader,
    paths: list[Path],
    delay_seconds: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
) -> UploadSummary:
    """Upload every existing path one at a time.

    Missing files are skipped and a failed upload does not stop the batch.
    """
    summary = UploadSummary()
    for path in paths:
        if not path.is_file():
            Log.warning(f"Missing file, skipped: {path}")
            summary.missing.append(path)
    existing = [p for p in paths if p.is_file()]
    for i, path in enumerate(existing):
        if i > 0 and delay_seconds > 0:
            sleep(delay_seconds)
        try:
            summary.uploaded.append(file_uploader.upload_file(path))
        except UploadError as exc:
            Log.error(f"Upload failed for {path}: {exc}")
            summary.failed.append(path)
    return summary


def report_summary(summary: UploadSummary) -> None:
    Log.info(f"Successful: {len(summary.uploaded)}")
    Log.info(f"Failed: {len(summary.failed)}")
    for asset in summary.uploaded:
        Log.info(f"  {asset.source.name}: {asset.uri}")


def main() -> int:
    settings = Settings()
    Log.configure(settings.log_level)

    def _upload() -> None:
        paths = [Path(settings.assets_root) / p for p in FILES_TO_UPLOAD]
        if not any(p.is_file() for p in paths):
            Log.error("No files found to upload")
            Log.info(f"Add files under {settings.assets_root}/ and update FILES_TO_UPLOAD")
            return
        storage = StorageUploaderFactory.create(settings)
        try:
            summary = upload_files(
                FileUploader(storage),
                paths,
                delay_seconds=settings.upload_delay_seconds,
            )
        finally:
            storage.close()
        report_summary(summary)

    return run_script(_upload)


if __name__ == "__main__":
    raise SystemExit(main())
