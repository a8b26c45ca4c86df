from mintkit.chain.mint_submitter import MintSubmitter
from mintkit.identity.models import Identity
from mintkit.logging.logger import Log
from mintkit.metadata.assembler import (
    assemble_metadata,
    category_for_mime,
    file_entry,
    single_creator,
)
from mintkit.metadata.exceptions import InvalidMetadataError
from mintkit.metadata.uploader import MetadataUploader
from mintkit.pipeline.pipeline import PipelineContext, PipelineState, PipelineStep
from mintkit.storage.file_uploader import FileUploader


class ValidateInputsStep(PipelineStep):
    """Checks every declared file, then runs the mint preflight.

    The transaction context captured here is reused by MintStep when the
    uploads finish inside its validity window and re-fetched otherwise.
    """

    state = PipelineState.VALIDATING_INPUTS

    def __init__(
        self,
        submitter: MintSubmitter | None = None,
        identity: Identity | None = None,
    ) -> None:
        self._submitter = submitter
        self._identity = identity

    def run(self, context: PipelineContext) -> PipelineContext:
        missing = [f for f in context.request.files if not f.path.is_file()]
        for source in missing:
            Log.error(f"{source.role} file not found: {source.path}")
        if missing:
            raise FileNotFoundError(
                "Missing input files: " + ", ".join(str(f.path) for f in missing)
            )
        Log.info(f"All {len(context.request.files)} input files present")
        if self._submitter is not None and self._identity is not None:
            context.transaction_context = self._submitter.prepare(self._identity)
        return context


class UploadAssetsStep(PipelineStep):
    state = PipelineState.UPLOADING_ASSETS

    def __init__(self, file_uploader: FileUploader) -> None:
        self._file_uploader = file_uploader

    def run(self, context: PipelineContext) -> PipelineContext:
        for source in context.request.files:
            context.assets.append(self._file_uploader.upload_local_file(source))
        Log.info(f"Uploaded {len(context.assets)} assets")
        return context


class AssembleMetadataStep(PipelineStep):
    state = PipelineState.ASSEMBLING_METADATA

    def __init__(self, identity: Identity) -> None:
        self._identity = identity

    def run(self, context: PipelineContext) -> PipelineContext:
        request = context.request
        if len(context.assets) != len(request.files):
            raise ValueError("Every declared file must be uploaded before metadata assembly")
        image = context.asset_for_role("image")
        animation = context.asset_for_role(request.animation_role)
        external = context.asset_for_role(request.external_role)
        category = request.category
        if category is None and image is not None:
            category = category_for_mime(image.mime_type)

        context.metadata = assemble_metadata(
            name=request.name,
            description=request.description,
            image=image.uri if image else None,
            animation_url=animation.uri if animation else None,
            external_url=external.uri if external else None,
            attributes=request.attributes,
            files=[file_entry(asset, cdn=request.cdn) for asset in context.assets],
            category=category,
            creators=single_creator(self._identity.address),
            extra=_extra_fields(context),
        )
        Log.info(
            f"Assembled metadata for '{request.name}': "
            f"{len(context.metadata.properties.files)} files, "
            f"{len(context.metadata.attributes)} attributes"
        )
        return context



def _extra_fields(context: PipelineContext) -> dict[str, object]:
    request = context.request
    if not request.media_roles:
        return request.extra
    if "media" in request.extra:
        raise InvalidMetadataError("Extra fields already define 'media'; drop it or media_roles")
    media: dict[str, object] = {}
    for key, role in request.media_roles.items():
        asset = context.asset_for_role(role)
        if asset is None:
            raise InvalidMetadataError(f"No uploaded file has role '{role}' for media.{key}")
        media[key] = asset.uri
    media["total_components"] = len(context.assets)
    return {**request.extra, "media": media}


class UploadMetadataStep(PipelineStep):
    state = PipelineState.UPLOADING_METADATA

    def __init__(self, metadata_uploader: MetadataUploader) -> None:
        self._metadata_uploader = metadata_uploader

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.metadata is None:
            raise ValueError("PipelineContext.metadata must be set before upload")
        context.metadata_uri = self._metadata_uploader.upload(context.metadata)
        Log.info(f"Metadata URI: {context.metadata_uri}")
        return context


class MintStep(PipelineStep):
    state = PipelineState.MINTING

    def __init__(self, submitter: MintSubmitter, identity: Identity) -> None:
        self._submitter = submitter
        self._identity = identity

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.metadata_uri:
            raise ValueError("PipelineContext.metadata_uri must be set before minting")
        context.mint_result = self._submitter.mint(
            self._identity,
            context.request.name,
            context.metadata_uri,
            context.transaction_context,
        )
        return context
