"""Uploaded document models."""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Document(BaseModel):
    """An uploaded document with its extracted text."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    filename: str
    content_type: str | None = None
    size_bytes: int = 0
    text: str
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    def info(self) -> "DocumentInfo":
        return DocumentInfo(
            id=self.id,
            filename=self.filename,
            content_type=self.content_type,
            size_bytes=self.size_bytes,
            word_count=self.word_count,
            uploaded_at=self.uploaded_at,
        )


class DocumentInfo(BaseModel):
    """Public metadata for an uploaded document (no text)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    filename: str
    content_type: str | None = None
    size_bytes: int
    word_count: int
    uploaded_at: datetime


class DocumentResponse(BaseModel):
    """Envelope returned by document endpoints."""

    document: DocumentInfo
