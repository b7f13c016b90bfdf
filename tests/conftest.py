from __future__ import annotations

from collections.abc import Generator
import os

import pytest
from fastapi.testclient import TestClient

# Ensure test settings exist before importing application modules
os.environ.setdefault("ENV", "test")
os.environ.setdefault("LLM_PROVIDER", "openai")
os.environ.setdefault("TRACE_MODE", "false")

from cyberguide.config import settings
from cyberguide.domain.schemas import ConversationMessage
from cyberguide.main import create_app


@pytest.fixture(autouse=True)
def no_configured_providers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "openai_api_key", None)
    monkeypatch.setattr(settings, "cerebras_base_url", None)
    monkeypatch.setattr(settings, "cerebras_api_key", None)
    monkeypatch.setattr(settings, "cerebras_model", None)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def base_messages() -> list[ConversationMessage]:
    return [
        ConversationMessage(role="assistant", content="How have things been lately?"),
        ConversationMessage(role="user", content="I've been really anxious, the project just isn't moving."),
        ConversationMessage(role="assistant", content="Which step feels the most stuck?"),
        ConversationMessage(role="user", content="Requirements keep changing and I don't know what to do first."),
    ]
