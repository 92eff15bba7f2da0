"""Custom exceptions and exception handlers."""

import logging
from enum import Enum

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def error_body(code: str, message: str) -> dict:
    """Build the structured error payload shared by every error response."""
    return {"error": {"code": code, "message": message}}


class LexBriefError(Exception):
    """Base exception for LexBrief."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, status_code: int = 500, code: str | None = None):
        self.message = message
        self.status_code = status_code
        if code:
            self.code = code
        super().__init__(message)


class AuthFailureKind(str, Enum):
    """Why a request was rejected by the auth guard."""

    NO_TOKEN = "NO_TOKEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_AUTH_FAILURES = {
    AuthFailureKind.NO_TOKEN: (
        status.HTTP_401_UNAUTHORIZED,
        "Access denied. No token provided.",
    ),
    AuthFailureKind.INVALID_TOKEN: (status.HTTP_401_UNAUTHORIZED, "Invalid token"),
    AuthFailureKind.INTERNAL_ERROR: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
    ),
}


class AuthError(LexBriefError):
    """Request rejected by the auth guard."""

    def __init__(self, kind: AuthFailureKind):
        self.kind = kind
        status_code, message = _AUTH_FAILURES[kind]
        super().__init__(message, status_code=status_code, code=kind.value)


class TextTooShortError(LexBriefError):
    """Submitted text is below the minimum length."""

    def __init__(self, min_length: int):
        super().__init__(
            f"Text must be at least {min_length} characters",
            status_code=status.HTTP_400_BAD_REQUEST,
            code="TEXT_TOO_SHORT",
        )


class DocumentNotFoundError(LexBriefError):
    """Document not found."""

    def __init__(self, document_id: str):
        super().__init__(
            f"Document '{document_id}' not found",
            status_code=status.HTTP_404_NOT_FOUND,
            code="DOCUMENT_NOT_FOUND",
        )


class UnsupportedFileTypeError(LexBriefError):
    """Uploaded file cannot be converted to text."""

    def __init__(self, filename: str):
        super().__init__(
            f"Unsupported file type: '{filename}'. Supported: PDF, DOCX, TXT.",
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            code="UNSUPPORTED_FILE_TYPE",
        )


class FileTooLargeError(LexBriefError):
    """Uploaded file exceeds the size limit."""

    def __init__(self, max_bytes: int):
        super().__init__(
            f"File exceeds the {max_bytes // (1024 * 1024)}MB limit",
            status_code=413,
            code="FILE_TOO_LARGE",
        )


class EmptyDocumentError(LexBriefError):
    """No readable text in the uploaded document."""

    def __init__(self):
        super().__init__(
            "No readable text found in document",
            status_code=status.HTTP_400_BAD_REQUEST,
            code="EMPTY_DOCUMENT",
        )


class ExtractionFailedError(LexBriefError):
    """Uploaded file is corrupt or unreadable."""

    def __init__(self, message: str):
        super().__init__(
            message,
            status_code=status.HTTP_400_BAD_REQUEST,
            code="EXTRACTION_FAILED",
        )


class SummarizerUnavailableError(LexBriefError):
    """LLM vendor is not configured."""

    def __init__(self, message: str):
        super().__init__(
            message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            code="SUMMARIZER_UNAVAILABLE",
        )


class SummarizerError(LexBriefError):
    """Summarization failed upstream."""

    def __init__(self, message: str):
        super().__init__(
            message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            code="SUMMARIZER_ERROR",
        )


async def lexbrief_exception_handler(request: Request, exc: LexBriefError) -> JSONResponse:
    """Handle LexBriefError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code, exc.message),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures in the structured error shape."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    logger.debug(f"Request validation failed: {jsonable_encoder(errors)}")
    return JSONResponse(
        status_code=422,
        content=error_body("VALIDATION_ERROR", message),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_ERROR", "Internal server error"),
    )
