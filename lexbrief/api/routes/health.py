"""Health check route."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from lexbrief.core.config import Settings, get_settings
from lexbrief.services.document_store import DocumentStore, get_document_store

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str
    documents_count: int
    llm_vendor: str
    auth_required: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(
    store: Annotated[DocumentStore, Depends(get_document_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Check service health."""
    return HealthResponse(
        status="healthy",
        documents_count=store.documents_count,
        llm_vendor=settings.default_vendor,
        auth_required=settings.require_auth,
    )
