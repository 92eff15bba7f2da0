"""Client for the LexBrief API and the summarizer form flows."""

from lexbrief.client.api import DEFAULT_BASE_URL, ApiError, LexBriefClient
from lexbrief.client.form import (
    ACCEPTED_EXTENSIONS,
    MIN_TEXT_LENGTH,
    FlowError,
    FlowErrorKind,
    SummaryForm,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "ApiError",
    "LexBriefClient",
    "ACCEPTED_EXTENSIONS",
    "MIN_TEXT_LENGTH",
    "FlowError",
    "FlowErrorKind",
    "SummaryForm",
]
