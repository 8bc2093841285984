"""Document upload endpoint."""

from fastapi import APIRouter, UploadFile

from docqa.core.ingestion import DocumentIngestionController
from docqa.core.models import Artifact

from .deps import IngestionConfigDep, TextExtractorDep
from .exceptions import ArtifactTooLarge
from .models import ExtractResponse

router = APIRouter(prefix="/api/v1", tags=["documents"])


@router.post("/documents/extract", response_model=ExtractResponse)
async def extract_document(
    file: UploadFile,
    extractor: TextExtractorDep,
    config: IngestionConfigDep,
) -> ExtractResponse:
    """Extract the text of an uploaded PDF or plain-text file.

    Returns 415 for other media types and 422 when the file cannot be
    decoded.
    """
    limit = config.max_upload_bytes
    if file.size is not None and file.size > limit:
        raise ArtifactTooLarge(f"{file.filename} exceeds {limit} bytes")
    # Never buffer more than one byte past the limit.
    data = await file.read(limit + 1)
    if len(data) > limit:
        raise ArtifactTooLarge(f"{file.filename} exceeds {limit} bytes")

    artifact = Artifact(
        name=file.filename or "",
        media_type=file.content_type or "",
        data=data,
    )
    ingestion = DocumentIngestionController(extractor)
    text = await ingestion.ingest_file(artifact)
    return ExtractResponse(name=artifact.name, media_type=artifact.media_type, text=text)
