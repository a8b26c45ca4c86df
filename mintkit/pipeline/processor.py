from mintkit.chain.mint_submitter import MintSubmitter
from mintkit.chain.rpc_client import SolanaRpcClient
from mintkit.config.settings import Settings
from mintkit.identity.models import Identity
from mintkit.logging.logger import Log
from mintkit.metadata.uploader import MetadataUploader
from mintkit.pipeline.pipeline import PipelineContext, PipelineState, PipelineStep
from mintkit.pipeline.steps import (
    AssembleMetadataStep,
    MintStep,
    UploadAssetsStep,
    UploadMetadataStep,
    ValidateInputsStep,
)
from mintkit.storage.base import BaseStorageUploader
from mintkit.storage.file_uploader import FileUploader


class MintPipeline:
    """Runs the mint steps in order; any failure is terminal.

    Pipeline: validate -> upload assets -> assemble metadata -> upload metadata -> mint.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def run(self, context: PipelineContext) -> PipelineContext:
        Log.info(f"Starting mint of '{context.request.name}'")
        for step in self._steps:
            context.state = step.state
            Log.debug(f"State -> {step.state.value}")
            try:
                context = step.run(context)
            except Exception as exc:
                context.state = PipelineState.FAILED
                context.error_message = str(exc)
                Log.debug(f"Mint of '{context.request.name}' failed while {step.state.value}: {exc}")
                raise
        context.state = PipelineState.DONE
        return context


def build_mint_pipeline(
    identity: Identity,
    storage: BaseStorageUploader,
    submitter: MintSubmitter,
) -> MintPipeline:
    """Build a MintPipeline from explicit collaborators."""
    file_uploader = FileUploader(storage)
    return MintPipeline(
        steps=[
            ValidateInputsStep(submitter, identity),
            UploadAssetsStep(file_uploader),
            AssembleMetadataStep(identity),
            UploadMetadataStep(MetadataUploader(file_uploader)),
            MintStep(submitter, identity),
        ]
    )


def build_rpc_client(settings: Settings) -> SolanaRpcClient:
    return SolanaRpcClient(
        rpc_url=settings.resolved_rpc_url(),
        timeout_seconds=settings.rpc_timeout_seconds,
    )
