"""Configuration module that loads environment variables from ``.env``."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_BASE_ENV_PATH = Path(".env")
if _BASE_ENV_PATH.exists():
    load_dotenv(_BASE_ENV_PATH, override=False)

_LOCAL_ENV_PATH = Path(".env.local")
if "PYTEST_CURRENT_TEST" not in os.environ and _LOCAL_ENV_PATH.exists():
    load_dotenv(_LOCAL_ENV_PATH, override=False)


class Settings(BaseSettings):
    """Application configuration validated at import time."""

    model_config = SettingsConfigDict(env_file=(".env",), extra="ignore", populate_by_name=True)

    env: Literal["dev", "staging", "prod", "test"] = Field(default="dev", alias="ENV")

    # --- LLM provider & models -------------------------------------------------
    llm_provider: Literal["openai", "cerebras"] = Field(default="openai", alias="LLM_PROVIDER")

    # OpenAI config (any OpenAI-compatible endpoint works via the base URL)
    openai_base_url: str | None = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_model: str | None = Field(default="gpt-4o", alias="OPENAI_MODEL")

    # Cerebras config (used as primary or as failover)
    cerebras_base_url: str | None = Field(default=None, alias="CEREBRAS_BASE_URL")
    cerebras_api_key: str | None = Field(default=None, alias="CEREBRAS_API_KEY")
    cerebras_model: str | None = Field(default=None, alias="CEREBRAS_MODEL")

    llm_timeout_seconds: float = Field(
        default=20.0,
        alias="LLM_TIMEOUT_SECONDS",
        validation_alias=AliasChoices("LLM_TIMEOUT_SECONDS", "AI_TIMEOUT_SECONDS"),
        gt=0,
    )

    # --- Recap pipeline ---------------------------------------------------------
    recap_temperature: float = Field(default=0.3, alias="RECAP_TEMPERATURE")
    recap_max_tokens: int | None = Field(default=400, alias="RECAP_MAX_TOKENS")
    recap_max_context_chars: int = Field(default=3600, alias="RECAP_MAX_CONTEXT_CHARS", gt=0)
    recap_topic_chars: int = Field(default=40, alias="RECAP_TOPIC_CHARS", gt=0)

    trace_mode: bool = Field(default=False, alias="TRACE_MODE")
    trace_sampling: float = Field(default=1.0, alias="TRACE_SAMPLING")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator(
        "openai_base_url",
        "openai_api_key",
        "cerebras_base_url",
        "cerebras_api_key",
        "cerebras_model",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        trimmed = str(value).strip()
        return trimmed or None


settings = Settings()
