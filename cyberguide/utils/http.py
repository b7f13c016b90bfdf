"""HTTP client factory for the OpenAI-compatible generator endpoints."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, Optional

import httpx

from cyberguide.config import settings


def bearer_headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


@contextmanager
def llm_client(api_key: str, *, timeout: Optional[float] = None) -> Iterator[httpx.Client]:
    """Yield an ``httpx.Client`` authorised for one provider.

    Requests are bounded by ``LLM_TIMEOUT_SECONDS`` unless ``timeout`` is given.
    """

    client = httpx.Client(
        headers=bearer_headers(api_key),
        timeout=timeout if timeout is not None else settings.llm_timeout_seconds,
    )
    try:
        yield client
    finally:
        client.close()
