from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class LocalFile:
    """A file on local disk declared as input of a run."""

    path: Path
    name: str
    mime_type: str
    role: str = "image"
    category: str | None = None


@dataclass(frozen=True)
class UploadedAsset:
    """Result of publishing a LocalFile to content-addressable storage."""

    uri: str
    source: LocalFile
    size_bytes: int

    @property
    def mime_type(self) -> str:
        return self.source.mime_type


@dataclass(frozen=True)
class MintResult:
    """Terminal outcome of a run: the created asset and its transaction."""

    asset_address: str
    transaction_signature: str
    explorer_url: str = ""
    asset_viewer_url: str = ""


@dataclass(frozen=True)
class MintRequest:
    """Everything a mint script declares up front.

    The first file with role 'image' becomes the primary image. The files
    whose roles match animation_role and external_role fill animation_url
    and external_url. media_roles maps keys of an extra "media" block to the
    roles whose URIs fill them. cdn, when set, is written on every file entry.
    """

    name: str
    files: list[LocalFile]
    description: str = ""
    attributes: list[tuple[str, str]] = field(default_factory=list)
    category: str | None = None
    animation_role: str | None = None
    external_role: str | None = None
    extra: dict[str, object] = field(default_factory=dict)
    media_roles: dict[str, str] = field(default_factory=dict)
    cdn: bool | None = None
