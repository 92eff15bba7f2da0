"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone
from typing import Callable, Generator
from unittest.mock import AsyncMock

import jwt
import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app modules
os.environ["JWT_SECRET"] = "test-secret"
os.environ["REQUIRE_AUTH"] = "true"
os.environ["DEFAULT_VENDOR"] = "openai"
os.environ["OPENAI_API_KEY"] = "test-openai-key"

_SAMPLE_TEXT = (
    "This Agreement is entered into by Acme Corp (the Supplier) and Beta LLC (the Customer). "
    "The Customer shall pay all invoices within thirty days of receipt. Either party may "
    "terminate this Agreement on sixty days written notice. The Supplier's liability is "
    "limited to the fees paid in the preceding twelve months."
)


@pytest.fixture
def sample_text() -> str:
    """A short contract excerpt, well above the minimum text length."""
    return _SAMPLE_TEXT


@pytest.fixture
def store():
    """Fresh in-memory document store."""
    from lexbrief.services.document_store import DocumentStore

    DocumentStore.reset()
    yield DocumentStore()
    DocumentStore.reset()


@pytest.fixture
def jwt_secret() -> str:
    return "test-secret"


@pytest.fixture
def make_token(jwt_secret: str) -> Callable[..., str]:
    """Factory for signed test tokens."""

    def _make(secret: str | None = None, expires_in: int = 3600, **claims) -> str:
        payload = {
            "sub": "user-1",
            "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
            **claims,
        }
        return jwt.encode(payload, secret or jwt_secret, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token) -> dict:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def mock_llm_client():
    """Mock LLM client that returns a canned summary."""
    from lexbrief.models.summary import TokenUsage

    client = AsyncMock()
    client.label = "openai/gpt-4o"
    client.extract_json = AsyncMock(
        return_value=(
            {
                "summary": "Acme supplies Beta; invoices are due in thirty days.",
                "keyClauses": [
                    "Payment within thirty days of receipt.",
                    "Termination on sixty days written notice.",
                ],
            },
            TokenUsage(input_tokens=120, output_tokens=40, total_tokens=160),
        )
    )
    return client


@pytest.fixture
def app_client(mock_llm_client) -> Generator[TestClient, None, None]:
    """Create test client with a fresh store and a mocked LLM."""
    from lexbrief.core.config import get_settings
    from lexbrief.services.document_store import DocumentStore

    DocumentStore.reset()
    get_settings.cache_clear()

    from lexbrief.main import app
    from lexbrief.services.summarizer import Summarizer, get_summarizer

    app.dependency_overrides[get_summarizer] = lambda: Summarizer(client=mock_llm_client)

    with TestClient(app) as client:
        yield client

    # Cleanup
    app.dependency_overrides.clear()
    DocumentStore.reset()
    get_settings.cache_clear()
