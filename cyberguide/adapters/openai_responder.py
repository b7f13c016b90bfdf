"""Adapter for invoking the OpenAI chat completion endpoint for recap text."""

from __future__ import annotations

from typing import Dict, List

import httpx

from cyberguide.config import settings
from cyberguide.domain.errors import ExternalServiceError, GeneratorTimeoutError
from cyberguide.utils.http import llm_client


def chat(
    messages: List[Dict[str, str]],
    *,
    temperature: float = 0.3,
    max_tokens: int | None = 400,
) -> str:
    """Invoke OpenAI's chat completions API and return the assistant message content."""

    if not settings.openai_api_key:
        raise ExternalServiceError("OpenAI configuration is incomplete (missing API key)")

    url = f"{(settings.openai_base_url or 'https://api.openai.com/v1').rstrip('/')}/chat/completions"
    payload: Dict[str, object] = {
        "model": settings.openai_model or "gpt-4o",
        "messages": messages,
        "temperature": temperature,
    }
    if max_tokens is not None:
        payload["max_tokens"] = max_tokens

    with llm_client(settings.openai_api_key) as client:
        try:
            response = client.post(url, json=payload)
        except httpx.TimeoutException as exc:
            raise GeneratorTimeoutError("OpenAI request timed out") from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"OpenAI request failed: {exc.__class__.__name__}") from exc
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ExternalServiceError(f"OpenAI request failed: {exc.response.status_code}") from exc

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (KeyError, ValueError, IndexError, TypeError) as exc:
            raise ExternalServiceError("OpenAI returned an unexpected payload") from exc

    return (content or "").strip()
