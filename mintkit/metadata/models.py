from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Attribute:
    """A single trait shown by wallets and marketplaces."""

    trait_type: str
    value: str


@dataclass(frozen=True)
class MetadataFile:
    """An entry of properties.files."""

    uri: str
    type: str
    category: str | None = None
    cdn: bool | None = None


@dataclass(frozen=True)
class Creator:
    """A creator entry of properties.creators."""

    address: str
    verified: bool = True
    share: int = 100


@dataclass(frozen=True)
class MetadataProperties:
    files: list[MetadataFile] = field(default_factory=list)
    category: str | None = None
    creators: list[Creator] = field(default_factory=list)


@dataclass(frozen=True)
class MetadataDocument:
    """Off-chain JSON describing an NFT."""

    name: str
    image: str
    description: str = ""
    animation_url: str | None = None
    external_url: str | None = None
    attributes: list[Attribute] = field(default_factory=list)
    properties: MetadataProperties = field(default_factory=MetadataProperties)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """JSON shape of the document; unset optional keys are omitted."""
        doc: dict[str, Any] = dict(self.extra)
        doc["name"] = self.name
        doc["description"] = self.description
        doc["image"] = self.image
        if self.animation_url:
            doc["animation_url"] = self.animation_url
        if self.external_url:
            doc["external_url"] = self.external_url
        doc["attributes"] = [
            {"trait_type": a.trait_type, "value": a.value} for a in self.attributes
        ]
        properties: dict[str, Any] = {
            "files": [_file_to_dict(f) for f in self.properties.files],
        }
        if self.properties.category:
            properties["category"] = self.properties.category
        if self.properties.creators:
            properties["creators"] = [
                {"address": c.address, "verified": c.verified, "share": c.share}
                for c in self.properties.creators
            ]
        doc["properties"] = properties
        return doc


def _file_to_dict(entry: MetadataFile) -> dict[str, Any]:
    data: dict[str, Any] = {"uri": entry.uri, "type": entry.type}
    if entry.category is not None:
        data["category"] = entry.category
    if entry.cdn is not None:
        data["cdn"] = entry.cdn
    return data
