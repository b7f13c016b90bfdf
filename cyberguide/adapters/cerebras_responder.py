"""Adapter for invoking the Cerebras chat completion endpoint for recap text."""

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
    """Invoke the Cerebras chat completions API and return the assistant message content."""

    if not settings.cerebras_base_url or not settings.cerebras_api_key or not settings.cerebras_model:
        raise ExternalServiceError("Cerebras configuration is incomplete")

    base = settings.cerebras_base_url.rstrip("/")
    if base.endswith("/v1"):
        base = base[: -len("/v1")]
    url = f"{base}/v1/chat/completions"
    payload: Dict[str, object] = {
        "model": settings.cerebras_model,
        "messages": messages,
        "temperature": temperature,
    }
    if max_tokens is not None:
        payload["max_tokens"] = max_tokens

    with llm_client(settings.cerebras_api_key) as client:
        try:
            response = client.post(url, json=payload)
        except httpx.TimeoutException as exc:
            raise GeneratorTimeoutError("Cerebras request timed out") from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"Cerebras request failed: {exc.__class__.__name__}") from exc
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ExternalServiceError(f"Cerebras request failed: {exc.response.status_code}") from exc

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (KeyError, ValueError, IndexError, TypeError) as exc:
            raise ExternalServiceError("Cerebras returned an unexpected payload") from exc

    return (content or "").strip()
