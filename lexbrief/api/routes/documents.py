"""Document upload API routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from lexbrief.core.config import Settings, get_settings
from lexbrief.core.exceptions import (
    DocumentNotFoundError,
    EmptyDocumentError,
    ExtractionFailedError,
    FileTooLargeError,
    UnsupportedFileTypeError,
)
from lexbrief.core.security import PrincipalDep
from lexbrief.models.document import Document, DocumentResponse
from lexbrief.services.document_store import DocumentStore, get_document_store
from lexbrief.services.text_extractor import ExtractionError, extract_text, is_supported

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/upload", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    document: Annotated[UploadFile, File(description="PDF, DOCX or TXT document")],
    _principal: PrincipalDep,
    store: Annotated[DocumentStore, Depends(get_document_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> DocumentResponse:
    """Upload a document and extract its text for later summarization."""
    filename = document.filename or "document"

    data = await document.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise FileTooLargeError(settings.max_upload_bytes)

    if not is_supported(filename):
        raise UnsupportedFileTypeError(filename)

    try:
        text = await run_in_threadpool(extract_text, filename, data)
    except ExtractionError as e:
        raise ExtractionFailedError(str(e))

    if not text.strip():
        raise EmptyDocumentError()

    stored = store.add(
        Document(
            filename=filename,
            content_type=document.content_type,
            size_bytes=len(data),
            text=text,
        )
    )
    logger.info(
        f"Uploaded '{filename}' as {stored.id}: {len(data)} bytes, {stored.word_count} words"
    )
    return DocumentResponse(document=stored.info())


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    _principal: PrincipalDep,
    store: Annotated[DocumentStore, Depends(get_document_store)],
) -> DocumentResponse:
    """Get metadata for an uploaded document."""
    document = store.get(document_id)
    if document is None:
        raise DocumentNotFoundError(document_id)
    return DocumentResponse(document=document.info())
