from __future__ import annotations

from typing import Callable, Optional

from cyberguide.domain.schemas import RecapPrompt
from cyberguide.ports.generator import resolve_invoker


def get_recap_invoker() -> Optional[Callable[[RecapPrompt], str]]:
    """FastAPI dependency yielding the configured generator, or ``None``."""

    return resolve_invoker()
