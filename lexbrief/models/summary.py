"""Summary-related Pydantic models."""

from datetime import datetime, timezone
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SummaryLength(str, Enum):
    """How long the generated summary should be."""

    BRIEF = "brief"
    MEDIUM = "medium"
    DETAILED = "detailed"


class SummaryFocus(str, Enum):
    """Which aspect of the document the summary emphasizes."""

    GENERAL = "general"
    FINANCIAL = "financial"
    COMPLIANCE = "compliance"
    RISKS = "risks"
    OBLIGATIONS = "obligations"


class SummaryTone(str, Enum):
    """Writing register of the summary."""

    LEGAL = "legal"
    BUSINESS = "business"
    SIMPLIFIED = "simplified"


class SummaryOptions(BaseModel):
    """Customization options for a summary request."""

    length: SummaryLength = Field(default=SummaryLength.MEDIUM)
    focus: SummaryFocus = Field(default=SummaryFocus.GENERAL)
    tone: SummaryTone = Field(default=SummaryTone.LEGAL)


class TextSummaryRequest(SummaryOptions):
    """Request to summarize pasted text."""

    text: str = Field(..., description="Legal document text to summarize")

    @property
    def options(self) -> SummaryOptions:
        return SummaryOptions(length=self.length, focus=self.focus, tone=self.tone)


class TokenUsage(BaseModel):
    """Token usage tracking."""

    input_tokens: int = Field(default=0)
    output_tokens: int = Field(default=0)
    total_tokens: int = Field(default=0)


class Summary(BaseModel):
    """A generated summary. Serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: int
    summary: str
    key_clauses: List[str] = Field(default_factory=list)
    word_count: int = Field(ge=0)
    original_word_count: int = Field(ge=0)
    compression_ratio: float
    ai_model: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SummaryResponse(BaseModel):
    """Envelope returned by every summarize endpoint."""

    summary: Summary
