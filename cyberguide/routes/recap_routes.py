"""Recap card generation routes."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, Depends

from cyberguide.application.error_handlers import render_recap_success
from cyberguide.deps import get_recap_invoker
from cyberguide.domain.errors import ValidationError
from cyberguide.domain.schemas import RecapEnvelope, RecapPrompt, RecapReq
from cyberguide.services.recap_pipeline import generate_recap, is_recap_eligible_mode

router = APIRouter(prefix="/recap", tags=["recap"])


@router.post("", response_model=RecapEnvelope)
def create_recap(
    req: RecapReq,
    invoke: Optional[Callable[[RecapPrompt], str]] = Depends(get_recap_invoker),
) -> Dict[str, Any]:
    """Summarise the conversation into a recap card; generator failures never surface here."""

    if not req.messages:
        raise ValidationError("messages must not be empty", code="empty_messages")
    if not is_recap_eligible_mode(req.mode):
        raise ValidationError(f"mode '{req.mode}' does not support recap cards", code="mode_not_supported")

    result = generate_recap(req.messages, invoke)
    return render_recap_success(result.recap, result.message)
