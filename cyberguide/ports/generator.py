"""Provider-agnostic text generator used by the recap pipeline."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from loguru import logger

from cyberguide.adapters import cerebras_responder, openai_responder
from cyberguide.config import settings
from cyberguide.domain.errors import ExternalServiceError
from cyberguide.domain.schemas import RecapPrompt

ChatImpl = Callable[..., str]


def resolve_invoker() -> Optional[Callable[[RecapPrompt], str]]:
    """Return a generator callable, or ``None`` when no provider is configured."""

    providers = _provider_order()
    if not providers:
        return None

    def invoke(prompt: RecapPrompt) -> str:
        return generate_text(_prompt_messages(prompt), providers=providers)

    return invoke


def generate_text(
    messages: List[Dict[str, str]],
    *,
    providers: List[str] | None = None,
) -> str:
    """Route the chat request to the configured providers, primary first."""

    providers = providers if providers is not None else _provider_order()
    if not providers:
        raise ExternalServiceError("No LLM providers are configured")

    last_exc: ExternalServiceError | None = None

    for provider in providers:
        chat_impl: ChatImpl = openai_responder.chat if provider == "openai" else cerebras_responder.chat
        try:
            return chat_impl(
                messages=messages,
                temperature=settings.recap_temperature,
                max_tokens=settings.recap_max_tokens,
            )
        except ExternalServiceError as exc:
            logger.warning(
                "LLM provider '{}' unavailable; attempting fallback. reason={}",
                provider,
                exc,
            )
            last_exc = exc
            continue

    assert last_exc is not None
    raise last_exc


def _prompt_messages(prompt: RecapPrompt) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": prompt.system_prompt},
        {"role": "user", "content": f"Conversation:\n{prompt.conversation}"},
    ]


def _provider_order() -> List[str]:
    primary = (settings.llm_provider or "openai").lower()
    candidates: List[str] = []

    if _is_configured(primary):
        candidates.append(primary)
    else:
        logger.warning("Primary LLM provider '{}' is not fully configured.", primary)

    fallback = "openai" if primary == "cerebras" else "cerebras"
    if fallback not in candidates and _is_configured(fallback):
        candidates.append(fallback)

    return candidates


def _is_configured(provider: str) -> bool:
    provider = provider.lower()
    if provider == "openai":
        return bool(settings.openai_api_key)
    if provider == "cerebras":
        return bool(settings.cerebras_base_url and settings.cerebras_api_key and settings.cerebras_model)
    return False
