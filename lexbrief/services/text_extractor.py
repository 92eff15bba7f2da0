"""Extract plain text from uploaded PDF, Word (.docx) and text files."""

import io
import logging
import re

import pdfplumber
from docx import Document as DocxDocument

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")

_FALLBACK_ENCODINGS = ("cp1252", "latin-1")


class ExtractionError(Exception):
    """Error while extracting text from a document."""

    pass


class UnsupportedFormatError(ExtractionError):
    """File extension has no extractor."""

    pass


def _clean(text: str) -> str:
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _extract_pdf(data: bytes) -> str:
    parts = []
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        for page in pdf.pages:
            t = page.extract_text() or ""
            if t.strip():
                parts.append(t)
    return _clean("\n\n".join(parts))


def _extract_docx(data: bytes) -> str:
    doc = DocxDocument(io.BytesIO(data))
    paras = [p.text for p in doc.paragraphs if p.text and p.text.strip()]
    return _clean("\n".join(paras))


def _decode_text(data: bytes) -> str:
    try:
        return _clean(data.decode("utf-8"))
    except UnicodeDecodeError:
        pass

    # latin-1 maps every byte, so this loop always returns
    for encoding in _FALLBACK_ENCODINGS:
        try:
            text = data.decode(encoding)
            logger.info(f"Decoded text file using {encoding} encoding")
            return _clean(text)
        except UnicodeDecodeError:
            continue
    raise ExtractionError("Unable to decode text file")


def is_supported(filename: str) -> bool:
    return (filename or "").lower().endswith(SUPPORTED_EXTENSIONS)


def extract_text(filename: str, data: bytes) -> str:
    """Extract text from a document based on its file extension.

    Args:
        filename: Original file name, used to pick the extractor.
        data: Raw file bytes.

    Returns:
        Cleaned text, possibly empty.

    Raises:
        UnsupportedFormatError: If the extension is not supported.
        ExtractionError: If the file is corrupt or unreadable.
    """
    name = (filename or "").lower()

    if name.endswith(".txt"):
        return _decode_text(data)

    try:
        if name.endswith(".pdf"):
            return _extract_pdf(data)
        if name.endswith(".docx"):
            return _extract_docx(data)
    except Exception as e:
        raise ExtractionError(f"Failed to read '{filename}': {e}") from e

    raise UnsupportedFormatError(f"Unsupported file type: {filename}")
