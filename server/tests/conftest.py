# server/tests/conftest.py
"""
Shared fixtures.

Every test gets its own empty MemStorage and an AIService without a Groq
client (so AI endpoints always serve fallback content), both injected
through FastAPI dependency overrides.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.database.connection import get_store
from app.database.storage import MemStorage
from app.main import app
from app.services.ai_service import AIService, get_ai_service


def make_groq_stub(content=None, error=None):
    """A stand-in for AsyncGroq whose chat.completions.create is awaitable."""
    client = MagicMock()
    if error is not None:
        client.chat.completions.create = AsyncMock(side_effect=error)
    else:
        message = MagicMock()
        message.content = content
        choice = MagicMock()
        choice.message = message
        response = MagicMock()
        response.choices = [choice]
        client.chat.completions.create = AsyncMock(return_value=response)
    return client


@pytest.fixture
def store():
    return MemStorage()


@pytest.fixture
def ai_service():
    return AIService(client=None)


@pytest.fixture
def client(store, ai_service):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_ai_service] = lambda: ai_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
