"""Summarization API routes."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends

from lexbrief.core.security import PrincipalDep
from lexbrief.models.summary import SummaryOptions, SummaryResponse, TextSummaryRequest
from lexbrief.services.summarizer import Summarizer, get_summarizer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/summarize", tags=["summarize"])


@router.post("/text", response_model=SummaryResponse)
async def summarize_text(
    request: TextSummaryRequest,
    _principal: PrincipalDep,
    summarizer: Annotated[Summarizer, Depends(get_summarizer)],
) -> SummaryResponse:
    """Summarize pasted text.

    Body: {"text": "...", "length": "medium", "focus": "general", "tone": "legal"}
    """
    logger.info(f"Text summarization requested, {len(request.text)} chars")
    summary = await summarizer.summarize_text(request.text, request.options)
    return SummaryResponse(summary=summary)


@router.post("/{document_id}", response_model=SummaryResponse)
async def summarize_document(
    document_id: str,
    _principal: PrincipalDep,
    summarizer: Annotated[Summarizer, Depends(get_summarizer)],
    options: Annotated[Optional[SummaryOptions], Body()] = None,
) -> SummaryResponse:
    """Summarize an uploaded document. Body is the options object; all fields optional."""
    logger.info(f"Summarization requested for document {document_id}")
    summary = await summarizer.summarize_document(document_id, options or SummaryOptions())
    return SummaryResponse(summary=summary)
