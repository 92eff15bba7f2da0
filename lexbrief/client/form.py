"""Submission flows for the summarizer form.

`SummaryForm` holds the state behind the upload and paste-text tabs: the
selected file or text, the options, a busy flag, and the last summary or
error. Each submit issues at most one flow at a time and never raises.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, Union

import httpx

from lexbrief.client.api import ApiError, LexBriefClient
from lexbrief.models.summary import Summary, SummaryOptions

logger = logging.getLogger(__name__)

# File picker filter; selections are not re-validated against it.
ACCEPTED_EXTENSIONS = (".pdf", ".docx", ".doc", ".txt")

MIN_TEXT_LENGTH = 100


class FlowErrorKind(str, Enum):
    """Where a submission failed."""

    VALIDATION = "validation"
    NETWORK = "network"
    SERVER = "server"


@dataclass(frozen=True)
class FlowError:
    kind: FlowErrorKind
    message: str


class SummaryForm:
    """State and submit handlers for one summarizer form."""

    def __init__(self, client: LexBriefClient, options: Optional[SummaryOptions] = None):
        self.client = client
        self.options = options or SummaryOptions()
        self.file: Optional[Path] = None
        self.text = ""
        self.loading = False
        self.summary: Optional[Summary] = None
        self.last_error: Optional[FlowError] = None

    @property
    def error(self) -> str:
        """Visible error string, empty when there is none."""
        return self.last_error.message if self.last_error else ""

    def select_file(self, path: Union[str, Path, None]) -> None:
        self.file = Path(path) if path is not None else None

    def set_text(self, text: str) -> None:
        self.text = text

    def set_options(self, **changes: Any) -> SummaryOptions:
        """Update one or more options; unknown values raise a validation error."""
        self.options = SummaryOptions(**{**self.options.model_dump(), **changes})
        return self.options

    @property
    def can_submit_upload(self) -> bool:
        return self.file is not None and not self.loading

    @property
    def can_submit_text(self) -> bool:
        return len(self.text.strip()) >= MIN_TEXT_LENGTH and not self.loading

    def submit_upload(self) -> Optional[Summary]:
        """Upload the selected file, then summarize it."""
        if self.file is None:
            self.last_error = FlowError(FlowErrorKind.VALIDATION, "Please select a file")
            return None

        path, options = self.file, self.options

        def flow() -> Summary:
            document_id = self.client.upload_document(path)
            return self.client.summarize_document(document_id, options)

        return self._run(flow)

    def submit_text(self) -> Optional[Summary]:
        """Summarize the pasted text."""
        if len(self.text.strip()) < MIN_TEXT_LENGTH:
            self.last_error = FlowError(
                FlowErrorKind.VALIDATION,
                f"Please enter at least {MIN_TEXT_LENGTH} characters of text",
            )
            return None

        text, options = self.text, self.options
        return self._run(lambda: self.client.summarize_text(text, options))

    def _run(self, flow: Callable[[], Summary]) -> Optional[Summary]:
        if self.loading:
            logger.debug("Submission ignored, a request is already in flight")
            return None

        self.loading = True
        self.last_error = None
        self.summary = None

        try:
            self.summary = flow()
        except ApiError as e:
            self.last_error = FlowError(FlowErrorKind.SERVER, e.message)
        except httpx.HTTPError as e:
            self.last_error = FlowError(FlowErrorKind.NETWORK, str(e) or "Network error")
        except Exception as e:
            logger.exception(f"Summary flow failed: {e}")
            self.last_error = FlowError(FlowErrorKind.SERVER, str(e) or "An error occurred")
        finally:
            self.loading = False

        return self.summary
