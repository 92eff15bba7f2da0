"""HTTP client for the LexBrief API."""

import logging
import mimetypes
from pathlib import Path
from typing import Any, Dict, Optional, Union

import httpx

from lexbrief.models.summary import Summary, SummaryOptions

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001/api"


class ApiError(Exception):
    """Non-2xx response from the LexBrief API."""

    def __init__(self, message: str, status_code: int, code: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


def _error_from_response(response: httpx.Response, fallback: str) -> ApiError:
    """Build an ApiError, preferring the server's `error.message` when present."""
    message, code = fallback, None
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message") or fallback
        code = body["error"].get("code")

    return ApiError(message, status_code=response.status_code, code=code)


class LexBriefClient:
    """Thin wrapper over the backend endpoints.

    No retries, caching or deduplication: every call issues one request.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        kwargs: Dict[str, Any] = {"base_url": base_url, "headers": headers}
        if timeout is not None:
            kwargs["timeout"] = timeout
        if transport is not None:
            kwargs["transport"] = transport
        self._http = httpx.Client(**kwargs)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "LexBriefClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def upload_document(self, path: Union[str, Path]) -> str:
        """Upload a file and return its document id."""
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"

        with path.open("rb") as fh:
            response = self._http.post(
                "/documents/upload",
                files={"document": (path.name, fh, content_type)},
            )

        if not response.is_success:
            raise _error_from_response(response, "Failed to upload document")

        document_id = response.json()["document"]["id"]
        logger.debug(f"Uploaded {path.name} as {document_id}")
        return document_id

    def summarize_document(self, document_id: str, options: SummaryOptions) -> Summary:
        """Request a summary of an uploaded document."""
        response = self._http.post(
            f"/summarize/{document_id}",
            json=options.model_dump(mode="json"),
        )
        return self._parse_summary(response)

    def summarize_text(self, text: str, options: SummaryOptions) -> Summary:
        """Request a summary of pasted text."""
        response = self._http.post(
            "/summarize/text",
            json={"text": text, **options.model_dump(mode="json")},
        )
        return self._parse_summary(response)

    def _parse_summary(self, response: httpx.Response) -> Summary:
        if not response.is_success:
            raise _error_from_response(response, "Failed to generate summary")
        return Summary.model_validate(response.json()["summary"])
