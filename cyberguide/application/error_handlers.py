"""Centralised envelope rendering helpers for the recap API."""

from __future__ import annotations

from typing import Any, Dict

from cyberguide.domain.schemas import Recap

RECAP_READY_MESSAGE = "Recap generated"


def render_recap_success(recap: Recap, message: str = RECAP_READY_MESSAGE) -> Dict[str, Any]:
    """Return the success envelope wrapping a recap and its status message."""

    return {
        "success": True,
        "data": {
            "message": message,
            "recap": recap.model_dump(),
        },
        "error": None,
    }


def render_failure(code: str, message: str) -> Dict[str, Any]:
    """Return the failure envelope used for every rejected request."""

    return {
        "success": False,
        "data": None,
        "error": {"code": code, "message": message},
    }
