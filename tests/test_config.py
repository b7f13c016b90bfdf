from __future__ import annotations

from cyberguide.config import Settings


def test_blank_provider_values_become_none() -> None:
    cfg = Settings(OPENAI_API_KEY="   ", CEREBRAS_BASE_URL="", CEREBRAS_MODEL=" llama ")

    assert cfg.openai_api_key is None
    assert cfg.cerebras_base_url is None
    assert cfg.cerebras_model == "llama"


def test_timeout_accepts_legacy_alias(monkeypatch) -> None:
    monkeypatch.delenv("LLM_TIMEOUT_SECONDS", raising=False)
    monkeypatch.setenv("AI_TIMEOUT_SECONDS", "7.5")

    assert Settings().llm_timeout_seconds == 7.5
    assert Settings().recap_max_context_chars == 3600
