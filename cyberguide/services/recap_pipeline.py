"""Recap orchestration: generator first, rule-based fallback on any failure."""

from __future__ import annotations

import random
import re
import time
from typing import Callable, Optional, Sequence

import httpx
from loguru import logger

from cyberguide.application.error_handlers import RECAP_READY_MESSAGE
from cyberguide.config import settings
from cyberguide.domain.errors import GeneratorTimeoutError
from cyberguide.domain.schemas import ConversationMessage, PipelineResult, Recap, RecapPrompt
from cyberguide.instrumentation.trace import trace_recap
from cyberguide.policy.recap_ruleset import RECAP_SYSTEM_PROMPT
from cyberguide.services.conversation_format import format_conversation
from cyberguide.services.recap_fallback import build_fallback_recap
from cyberguide.services.recap_parser import parse_recap_output
from cyberguide.services.recap_sanitizer import sanitize_recap

RecapInvoker = Callable[[RecapPrompt], str]

RECAP_ELIGIBLE_MODES = frozenset({"chat", "generate_recap"})
SAFE_MODE_MESSAGE = f"{RECAP_READY_MESSAGE} (safe mode)"

_TIMEOUT_MESSAGE_RE = re.compile(r"timeout|timed out|超时", re.IGNORECASE)


def is_recap_eligible_mode(mode: Optional[str]) -> bool:
    return mode in RECAP_ELIGIBLE_MODES


def build_recap_prompt(messages: Sequence[ConversationMessage], max_chars: Optional[int] = None) -> RecapPrompt:
    return RecapPrompt(
        system_prompt=RECAP_SYSTEM_PROMPT,
        conversation=format_conversation(messages, max_chars or settings.recap_max_context_chars),
    )


def classify_recap_error(exc: BaseException) -> str:
    """Map a generator failure onto ``ai_timeout`` or ``ai_error``."""

    if isinstance(exc, (GeneratorTimeoutError, TimeoutError, httpx.TimeoutException)):
        return "ai_timeout"
    code = getattr(exc, "code", None)
    if isinstance(code, str) and code.lower() == "ai_timeout":
        return "ai_timeout"
    if exc.__class__.__name__ == "AbortError":
        return "ai_timeout"
    if _TIMEOUT_MESSAGE_RE.search(str(exc)):
        return "ai_timeout"
    return "ai_error"


def generate_recap(
    messages: Sequence[ConversationMessage],
    invoke: Optional[RecapInvoker] = None,
    *,
    clock: Callable[[], float] = time.perf_counter,
    rng: Optional[random.Random] = None,
) -> PipelineResult:
    """Produce a valid recap for ``messages``; never raises for generator problems."""

    started = clock()
    error_type: Optional[str] = None
    recap: Optional[Recap] = None

    if invoke is None:
        error_type = "no_ai_provider"
        logger.warning("No recap generator configured; using rule-based recap. category={}", error_type)
    else:
        try:
            raw_output = invoke(build_recap_prompt(messages))
        except Exception as exc:
            error_type = classify_recap_error(exc)
            logger.warning("Recap generator failed; using rule-based recap. category={} reason={}", error_type, exc)
        else:
            parsed = parse_recap_output(raw_output)
            if parsed is None or not parsed.is_structured():
                error_type = "dirty_format"
                logger.warning(
                    "Recap generator output was not a complete recap; using rule-based recap. category={}",
                    error_type,
                )
            else:
                recap = sanitize_recap(parsed, build_fallback_recap(messages, rng=rng))

    used_fallback = recap is None
    if recap is None:
        recap = build_fallback_recap(messages, rng=rng)

    result = PipelineResult(
        message=SAFE_MODE_MESSAGE if used_fallback else RECAP_READY_MESSAGE,
        recap=recap,
        used_fallback=used_fallback,
        error_type=error_type,
        latency_ms=max(0, int(round((clock() - started) * 1000))),
    )
    trace_recap(result)
    return result
