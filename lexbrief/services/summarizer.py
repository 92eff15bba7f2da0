"""Summarizer - builds prompts from options and assembles Summary results."""

import logging
import time
from typing import Any, Dict, List, Optional

from lexbrief.core.config import Settings, get_settings
from lexbrief.core.exceptions import (
    DocumentNotFoundError,
    SummarizerError,
    SummarizerUnavailableError,
    TextTooShortError,
)
from lexbrief.models.summary import (
    Summary,
    SummaryFocus,
    SummaryLength,
    SummaryOptions,
    SummaryTone,
)
from lexbrief.services.document_store import DocumentStore, get_document_store
from lexbrief.services.llm_client import (
    BaseLLMClient,
    LLMClientError,
    LLMClientFactory,
    LLMNotConfiguredError,
)

logger = logging.getLogger(__name__)

LENGTH_INSTRUCTIONS = {
    SummaryLength.BRIEF: "Write a brief summary of 2-3 sentences.",
    SummaryLength.MEDIUM: "Write a summary of 1-2 paragraphs.",
    SummaryLength.DETAILED: "Write a detailed summary of 3-4 paragraphs.",
}

FOCUS_INSTRUCTIONS = {
    SummaryFocus.GENERAL: "Give a general overview of the document's purpose, parties and main terms.",
    SummaryFocus.FINANCIAL: "Focus on financial terms: payments, fees, penalties, deposits and amounts.",
    SummaryFocus.COMPLIANCE: "Focus on compliance and legal requirements, governing law and regulatory duties.",
    SummaryFocus.RISKS: "Focus on risks: liabilities, indemnities, termination triggers and one-sided clauses.",
    SummaryFocus.OBLIGATIONS: "Focus on the obligations and duties of each party, including deadlines.",
}

TONE_INSTRUCTIONS = {
    SummaryTone.LEGAL: "Use precise legal language suitable for a legal professional.",
    SummaryTone.BUSINESS: "Use clear business language suitable for a manager.",
    SummaryTone.SIMPLIFIED: "Use plain, simple language a non-lawyer can follow.",
}

SYSTEM_PROMPT = """You are a legal document summarization assistant.

{length}
{focus}
{tone}

Also list the key clauses and provisions of the document, most important first.
Quote or closely paraphrase each clause in one or two sentences.

Respond with a JSON object:
{{
  "summary": "the summary text",
  "keyClauses": ["clause 1", "clause 2"]
}}"""


def build_prompt(options: SummaryOptions) -> str:
    """Render the system prompt for a set of options."""
    return SYSTEM_PROMPT.format(
        length=LENGTH_INSTRUCTIONS[options.length],
        focus=FOCUS_INSTRUCTIONS[options.focus],
        tone=TONE_INSTRUCTIONS[options.tone],
    )


def count_words(text: str) -> int:
    return len(text.split())


def compression_ratio(word_count: int, original_word_count: int) -> int:
    """Percentage of words removed, 0 when there is nothing to compress."""
    if original_word_count <= 0:
        return 0
    return max(0, round(100 * (1 - word_count / original_word_count)))


def _parse_key_clauses(raw: Dict[str, Any]) -> List[str]:
    clauses = raw.get("keyClauses", raw.get("key_clauses")) or []
    if not isinstance(clauses, list):
        return []
    return [str(c).strip() for c in clauses if str(c).strip()]


class Summarizer:
    """Summarizes legal text using the configured LLM vendor."""

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        settings: Optional[Settings] = None,
        client: Optional[BaseLLMClient] = None,
    ):
        self.store = store or get_document_store()
        self.settings = settings or get_settings()
        self._client = client

    def _get_client(self) -> BaseLLMClient:
        if self._client is None:
            try:
                self._client = LLMClientFactory.get_client(settings=self.settings)
            except LLMNotConfiguredError as e:
                raise SummarizerUnavailableError(str(e))
        return self._client

    async def summarize_text(self, text: str, options: SummaryOptions) -> Summary:
        """Summarize pasted text.

        Raises:
            TextTooShortError: If the trimmed text is below the minimum length.
        """
        if len(text.strip()) < self.settings.min_text_length:
            raise TextTooShortError(self.settings.min_text_length)
        return await self._summarize(text, options)

    async def summarize_document(self, document_id: str, options: SummaryOptions) -> Summary:
        """Summarize a previously uploaded document.

        Raises:
            DocumentNotFoundError: If the document id is unknown.
        """
        document = self.store.get(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return await self._summarize(document.text, options)

    async def _summarize(self, text: str, options: SummaryOptions) -> Summary:
        client = self._get_client()
        original_word_count = count_words(text)
        if len(text) > self.settings.max_document_chars:
            logger.warning(
                f"Truncating document from {len(text)} to {self.settings.max_document_chars} chars for the model"
            )

        logger.info(
            f"Summarizing {original_word_count} words with {client.label} "
            f"(length={options.length.value}, focus={options.focus.value}, tone={options.tone.value})"
        )
        start = time.time()

        try:
            raw, usage = await client.extract_json(
                build_prompt(options),
                text[: self.settings.max_document_chars],
                temperature=self.settings.summary_temperature,
                max_tokens=self.settings.summary_max_tokens,
            )
        except LLMClientError as e:
            logger.error(f"Summarization failed: {e}")
            raise SummarizerError(f"Failed to generate summary: {e}")

        summary_text = str(raw.get("summary") or "").strip()
        if not summary_text:
            raise SummarizerError("Failed to generate summary: empty response from model")

        word_count = count_words(summary_text)
        summary = Summary(
            id=self.store.next_summary_id(),
            summary=summary_text,
            key_clauses=_parse_key_clauses(raw),
            word_count=word_count,
            original_word_count=original_word_count,
            compression_ratio=compression_ratio(word_count, original_word_count),
            ai_model=client.label,
        )

        logger.info(
            f"Summary {summary.id} generated in {int((time.time() - start) * 1000)}ms: "
            f"{word_count}/{original_word_count} words, tokens: {usage.total_tokens}"
        )
        return summary


def get_summarizer() -> Summarizer:
    """Get summarizer instance."""
    return Summarizer()
