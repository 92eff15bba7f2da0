"""Pydantic models package."""

from lexbrief.models.document import Document, DocumentInfo, DocumentResponse
from lexbrief.models.summary import (
    Summary,
    SummaryFocus,
    SummaryLength,
    SummaryOptions,
    SummaryResponse,
    SummaryTone,
    TextSummaryRequest,
    TokenUsage,
)

__all__ = [
    # Document models
    "Document",
    "DocumentInfo",
    "DocumentResponse",
    # Summary models
    "Summary",
    "SummaryOptions",
    "SummaryLength",
    "SummaryFocus",
    "SummaryTone",
    "SummaryResponse",
    "TextSummaryRequest",
    "TokenUsage",
]
