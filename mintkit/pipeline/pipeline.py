from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from mintkit.chain.transaction_context import TransactionContext
from mintkit.metadata.models import MetadataDocument
from mintkit.pipeline.models import MintRequest, MintResult, UploadedAsset


class PipelineState(str, Enum):
    IDLE = "idle"
    VALIDATING_INPUTS = "validating_inputs"
    UPLOADING_ASSETS = "uploading_assets"
    ASSEMBLING_METADATA = "assembling_metadata"
    UPLOADING_METADATA = "uploading_metadata"
    MINTING = "minting"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class PipelineContext:
    request: MintRequest
    state: PipelineState = PipelineState.IDLE
    assets: list[UploadedAsset] = field(default_factory=list)
    metadata: MetadataDocument | None = None
    metadata_uri: str = ""
    transaction_context: TransactionContext | None = None
    mint_result: MintResult | None = None
    error_message: str = ""

    def asset_for_role(self, role: str | None) -> UploadedAsset | None:
        if role is None:
            return None
        for asset in self.assets:
            if asset.source.role == role:
                return asset
        return None


class PipelineStep(ABC):
    state: ClassVar[PipelineState]

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
