"""Sampled JSON trace events for recap generation and request failures.

Every event is stamped with the request id bound by the middleware and the
recap ruleset version, so recap outcomes can be grouped by card generation.
"""

from __future__ import annotations

import json
import random
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from loguru import logger

from cyberguide.config import settings
from cyberguide.domain.schemas import PipelineResult
from cyberguide.policy.recap_ruleset import RULESET_VERSION

_request_id: ContextVar[Optional[str]] = ContextVar("recap_request_id", default=None)


def bind_request_id(request_id: str) -> Token[Optional[str]]:
    return _request_id.set(request_id)


def release_request_id(token: Token[Optional[str]]) -> None:
    _request_id.reset(token)


def current_request_id() -> Optional[str]:
    return _request_id.get()


def _should_emit(*, force: bool) -> bool:
    if not settings.trace_mode:
        return False
    if force:
        return True
    rate = max(0.0, min(float(settings.trace_sampling or 0.0), 1.0))
    return rate >= 1.0 or (rate > 0.0 and random.random() <= rate)


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_plain(item) for item in value]
    return str(value)


def build_event(name: str, **fields: Any) -> Dict[str, Any]:
    event: Dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        "name": name,
        "ruleset": RULESET_VERSION,
        "request_id": current_request_id() or "",
    }
    event.update({key: _plain(value) for key, value in fields.items()})
    return event


def _write(event: Dict[str, Any]) -> None:
    logger.info(json.dumps(event, ensure_ascii=False, separators=(",", ":")))


def tracepoint(name: str, **fields: Any) -> None:
    if _should_emit(force=False):
        _write(build_event(name, **fields))


def trace_recap(result: PipelineResult) -> None:
    """Emit ``recap.generated``: fallback flag, error category (``"none"`` on success), latency and card shape."""

    tracepoint(
        "recap.generated",
        used_fallback=result.used_fallback,
        error_type=result.error_type or "none",
        latency_ms=result.latency_ms,
        blockers=len(result.recap.blockers),
        actions=len(result.recap.actions),
    )


def trace_exception(name: str, exc: BaseException, **fields: Any) -> None:
    """Always emitted while tracing is on; carries the error ``code`` and status when present."""

    if not _should_emit(force=True):
        return
    error: Dict[str, Any] = {"type": exc.__class__.__name__, "message": str(exc)}
    for attr in ("code", "status_code"):
        value = getattr(exc, attr, None)
        if value is not None:
            error[attr] = value
    _write(build_event(name, error=error, **fields))
