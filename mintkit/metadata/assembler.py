"""Builds MetadataDocument values from uploaded asset URIs. No network calls."""

from collections.abc import Iterable, Mapping
from typing import Any

from mintkit.metadata.exceptions import InvalidMetadataError
from mintkit.metadata.models import (
    Attribute,
    Creator,
    MetadataDocument,
    MetadataFile,
    MetadataProperties,
)
from mintkit.pipeline.models import UploadedAsset

TOTAL_CREATOR_SHARE = 100
RESERVED_KEYS = frozenset(
    {"name", "description", "image", "animation_url", "external_url", "attributes", "properties"}
)


def assemble_metadata(
    *,
    name: str | None,
    image: str | None,
    description: str = "",
    animation_url: str | None = None,
    external_url: str | None = None,
    attributes: Iterable[Attribute | tuple[str, str]] = (),
    files: Iterable[MetadataFile] = (),
    category: str | None = None,
    creators: Iterable[Creator] = (),
    extra: Mapping[str, Any] | None = None,
) -> MetadataDocument:
    """Validate inputs and build a MetadataDocument.

    Attribute order is kept as given and duplicates are not removed.

    Raises:
        InvalidMetadataError: if name or image is missing, creator shares do
            not sum to 100, or extra fields collide with schema keys.
    """
    if not name or not name.strip():
        raise InvalidMetadataError("Metadata requires a non-empty 'name'")
    if not image or not image.strip():
        raise InvalidMetadataError("Metadata requires a non-empty 'image'")

    creator_list = list(creators)
    _check_creator_shares(creator_list)

    extra_fields = dict(extra or {})
    clashing = sorted(RESERVED_KEYS.intersection(extra_fields))
    if clashing:
        raise InvalidMetadataError(f"Extra fields may not override schema keys: {clashing}")

    return MetadataDocument(
        name=name,
        image=image,
        description=description,
        animation_url=animation_url or None,
        external_url=external_url or None,
        attributes=[_to_attribute(a) for a in attributes],
        properties=MetadataProperties(
            files=list(files),
            category=category,
            creators=creator_list,
        ),
        extra=extra_fields,
    )


def file_entry(
    asset: UploadedAsset,
    category: str | None = None,
    cdn: bool | None = None,
) -> MetadataFile:
    """properties.files entry pointing at an uploaded asset."""
    return MetadataFile(
        uri=asset.uri,
        type=asset.mime_type,
        category=category if category is not None else asset.source.category,
        cdn=cdn,
    )


def single_creator(address: str) -> list[Creator]:
    return [Creator(address=address, verified=True, share=TOTAL_CREATOR_SHARE)]


def category_for_mime(mime_type: str) -> str:
    return "audio" if mime_type.startswith("audio") else "image"


def _to_attribute(item: Attribute | tuple[str, str]) -> Attribute:
    if isinstance(item, Attribute):
        return item
    trait_type, value = item
    return Attribute(trait_type=trait_type, value=value)


def _check_creator_shares(creators: list[Creator]) -> None:
    if not creators:
        return
    for creator in creators:
        if not 0 <= creator.share <= TOTAL_CREATOR_SHARE:
            raise InvalidMetadataError(
                f"Creator {creator.address} share must be within 0..100, got {creator.share}"
            )
    total = sum(c.share for c in creators)
    if total != TOTAL_CREATOR_SHARE:
        raise InvalidMetadataError(f"Creator shares must sum to 100, got {total}")
