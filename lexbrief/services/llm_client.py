"""LLM client abstraction for the summarization vendors."""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from lexbrief.core.config import Settings, get_settings
from lexbrief.models.summary import TokenUsage

logger = logging.getLogger(__name__)


class LLMClientError(Exception):
    """Error from LLM client."""

    pass


class LLMNotConfiguredError(LLMClientError):
    """Vendor is unknown or has no API key."""

    pass


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients."""

    vendor: str = ""

    def __init__(self, model: str):
        self.model = model

    @property
    def label(self) -> str:
        """Human-readable `<vendor>/<model>` identifier."""
        return f"{self.vendor}/{self.model}"

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        document: str,
        temperature: float = 0.0,
        max_tokens: int = 2048,
    ) -> Tuple[str, TokenUsage]:
        """Generate response from LLM.

        Args:
            prompt: System/instruction prompt.
            document: Document text to summarize.
            temperature: Sampling temperature.
            max_tokens: Maximum output tokens.

        Returns:
            Tuple of (response_text, token_usage).
        """
        pass

    async def extract_json(
        self,
        prompt: str,
        document: str,
        temperature: float = 0.0,
        max_tokens: int = 2048,
    ) -> Tuple[Dict[str, Any], TokenUsage]:
        """Generate and parse a JSON object response."""
        json_prompt = f"{prompt}\n\nRespond with valid JSON only, no markdown or explanations."
        text, usage = await self.generate(json_prompt, document, temperature, max_tokens)
        return self._extract_json_from_text(text), usage

    def _extract_json_from_text(self, text: str) -> Dict[str, Any]:
        """Extract JSON from text response, handling markdown code blocks."""
        json_match = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
        if json_match:
            text = json_match.group(1)

        text = text.strip()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise LLMClientError(f"Failed to parse JSON response: {e}")

        if not isinstance(data, dict):
            raise LLMClientError("Expected a JSON object in response")
        return data


class AnthropicClient(BaseLLMClient):
    """Anthropic Claude client."""

    vendor = "anthropic"

    def __init__(self, api_key: str, model: str):
        super().__init__(model)
        import anthropic

        self.client = anthropic.AsyncAnthropic(api_key=api_key)

    async def generate(
        self,
        prompt: str,
        document: str,
        temperature: float = 0.0,
        max_tokens: int = 2048,
    ) -> Tuple[str, TokenUsage]:
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=prompt,
                messages=[{"role": "user", "content": document}],
            )
        except Exception as e:
            raise LLMClientError(f"Anthropic API error: {e}")

        text = response.content[0].text
        usage = TokenUsage(
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            total_tokens=response.usage.input_tokens + response.usage.output_tokens,
        )
        return text, usage


class OpenAIClient(BaseLLMClient):
    """OpenAI client."""

    vendor = "openai"

    def __init__(self, api_key: str, model: str):
        super().__init__(model)
        import openai

        self.client = openai.AsyncOpenAI(api_key=api_key)

    async def _complete(
        self,
        prompt: str,
        document: str,
        temperature: float,
        max_tokens: int,
        **kwargs: Any,
    ) -> Tuple[str, TokenUsage]:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=[
                    {"role": "system", "content": prompt},
                    {"role": "user", "content": document},
                ],
                **kwargs,
            )
        except Exception as e:
            raise LLMClientError(f"OpenAI API error: {e}")

        text = response.choices[0].message.content or ""
        usage = TokenUsage(
            input_tokens=response.usage.prompt_tokens if response.usage else 0,
            output_tokens=response.usage.completion_tokens if response.usage else 0,
            total_tokens=response.usage.total_tokens if response.usage else 0,
        )
        return text, usage

    async def generate(
        self,
        prompt: str,
        document: str,
        temperature: float = 0.0,
        max_tokens: int = 2048,
    ) -> Tuple[str, TokenUsage]:
        return await self._complete(prompt, document, temperature, max_tokens)

    async def extract_json(
        self,
        prompt: str,
        document: str,
        temperature: float = 0.0,
        max_tokens: int = 2048,
    ) -> Tuple[Dict[str, Any], TokenUsage]:
        text, usage = await self._complete(
            f"{prompt}\n\nRespond with valid JSON.",
            document,
            temperature,
            max_tokens,
            response_format={"type": "json_object"},
        )
        return self._extract_json_from_text(text or "{}"), usage


class GeminiClient(BaseLLMClient):
    """Google Gemini client."""

    vendor = "gemini"

    def __init__(self, api_key: str, model: str):
        super().__init__(model)
        import google.generativeai as genai

        genai.configure(api_key=api_key)
        self.genai = genai

    async def generate(
        self,
        prompt: str,
        document: str,
        temperature: float = 0.0,
        max_tokens: int = 2048,
    ) -> Tuple[str, TokenUsage]:
        try:
            model = self.genai.GenerativeModel(
                self.model,
                system_instruction=prompt,
                generation_config=self.genai.GenerationConfig(
                    temperature=temperature,
                    max_output_tokens=max_tokens,
                ),
            )
            response = await model.generate_content_async(document)
            text = response.text
        except Exception as e:
            raise LLMClientError(f"Gemini API error: {e}")

        meta = response.usage_metadata
        usage = TokenUsage(
            input_tokens=meta.prompt_token_count if meta else 0,
            output_tokens=meta.candidates_token_count if meta else 0,
            total_tokens=meta.total_token_count if meta else 0,
        )
        return text, usage


_VENDORS = {
    "anthropic": (AnthropicClient, "anthropic_api_key", "anthropic_model", "ANTHROPIC_API_KEY"),
    "openai": (OpenAIClient, "openai_api_key", "openai_model", "OPENAI_API_KEY"),
    "gemini": (GeminiClient, "google_api_key", "gemini_model", "GOOGLE_API_KEY"),
}


class LLMClientFactory:
    """Factory for creating LLM clients."""

    _clients: Dict[str, BaseLLMClient] = {}

    @classmethod
    def get_client(
        cls,
        vendor: Optional[str] = None,
        model: Optional[str] = None,
        settings: Optional[Settings] = None,
    ) -> BaseLLMClient:
        """Get or create an LLM client.

        Args:
            vendor: LLM vendor (anthropic, openai, gemini). Defaults to settings.
            model: Model name override.
            settings: Settings instance.

        Returns:
            LLM client instance.
        """
        settings = settings or get_settings()
        vendor = (vendor or settings.default_vendor).lower()

        if vendor not in _VENDORS:
            raise LLMNotConfiguredError(f"Unknown vendor: {vendor}")

        client_cls, key_attr, model_attr, env_name = _VENDORS[vendor]
        api_key = getattr(settings, key_attr)
        if not api_key:
            raise LLMNotConfiguredError(f"{env_name} not configured")
        model = model or getattr(settings, model_attr)

        key = f"{vendor}:{model}"
        if key not in cls._clients:
            try:
                cls._clients[key] = client_cls(api_key, model)
            except ImportError as e:
                raise LLMNotConfiguredError(f"{vendor} SDK not installed: {e}")
            logger.info(f"Created LLM client: {vendor}/{model}")

        return cls._clients[key]

    @classmethod
    def clear_cache(cls) -> None:
        """Clear client cache."""
        cls._clients.clear()
