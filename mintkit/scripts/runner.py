from collections.abc import Callable
from pathlib import Path

from mintkit.chain.mint_submitter import MintSubmitter
from mintkit.config.settings import Settings
from mintkit.identity.loader import load_identity
from mintkit.logging.logger import Log
from mintkit.pipeline.models import LocalFile, MintRequest, MintResult
from mintkit.pipeline.pipeline import PipelineContext
from mintkit.pipeline.processor import build_mint_pipeline, build_rpc_client
from mintkit.storage.factory import StorageUploaderFactory
from mintkit.storage.file_uploader import local_file

DEFAULT_TIPS = (
    "Ensure all files exist in the assets/ folders",
    "Check your SOL balance for transaction fees",
    "Check your storage service credentials and quota",
    "Large files may need multiple attempts",
)


def run_script(action: Callable[[], object], tips: tuple[str, ...] = DEFAULT_TIPS) -> int:
    """Run one script body; log any failure with troubleshooting tips.

    Returns the process exit code.
    """
    try:
        action()
    except Exception as exc:
        Log.error(f"Error: {exc}")
        for tip in tips:
            Log.info(f"Tip: {tip}")
        return 1
    return 0


def asset_file(
    settings: Settings,
    relative_path: str,
    *,
    name: str | None = None,
    mime_type: str | None = None,
    role: str = "image",
    category: str | None = None,
) -> LocalFile:
    """LocalFile for a path under settings.assets_root."""
    return local_file(
        Path(settings.assets_root) / relative_path,
        name=name,
        mime_type=mime_type,
        role=role,
        category=category,
    )


def mint_with_settings(settings: Settings, request: MintRequest) -> MintResult:
    """Load the wallet, wire adapters from settings and run the pipeline once."""
    identity = load_identity(settings.keypair_path)
    Log.info(f"Network: {settings.network}, wallet: {identity.address}")
    storage = StorageUploaderFactory.create(settings)
    try:
        with build_rpc_client(settings) as rpc:
            pipeline = build_mint_pipeline(
                identity,
                storage,
                MintSubmitter.from_settings(settings, rpc),
            )
            context = pipeline.run(PipelineContext(request=request))
    finally:
        storage.close()
    if context.mint_result is None:
        raise RuntimeError("Pipeline finished without a mint result")
    report_mint(context.mint_result)
    return context.mint_result


def report_mint(result: MintResult) -> None:
    Log.info("NFT created")
    Log.info(f"NFT address: {result.asset_address}")
    Log.info(f"Transaction: {result.explorer_url or result.transaction_signature}")
    if result.asset_viewer_url:
        Log.info(f"View asset: {result.asset_viewer_url}")
