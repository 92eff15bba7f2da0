"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "LexBrief"
    debug: bool = False

    # CORS origins (comma-separated string in env)
    cors_origins_str: str = Field(default="http://localhost:5173", alias="cors_origins")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> List[str]:
        """Parse comma-separated CORS origins."""
        return [o.strip() for o in self.cors_origins_str.split(",") if o.strip()]

    # Authentication settings
    require_auth: bool = True  # Set to False to allow anonymous access in development
    jwt_secret: Optional[str] = None
    jwt_algorithms_str: str = Field(default="HS256", alias="jwt_algorithms")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def jwt_algorithms(self) -> List[str]:
        """Parse comma-separated JWT algorithms."""
        return [a.strip() for a in self.jwt_algorithms_str.split(",") if a.strip()]

    # Document settings
    max_upload_bytes: int = 10 * 1024 * 1024
    min_text_length: int = 100
    max_document_chars: int = 120_000
    max_documents: int = 1000  # Oldest uploads are evicted beyond this

    # LLM settings
    default_vendor: str = "openai"

    # Anthropic
    anthropic_api_key: Optional[str] = None
    anthropic_model: str = "claude-sonnet-4-20250514"

    # OpenAI
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"

    # Google Gemini
    google_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"

    # Summarization settings
    summary_temperature: float = 0.2
    summary_max_tokens: int = 2048


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
