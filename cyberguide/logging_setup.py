"""Centralised logging configuration for the recap service."""

from __future__ import annotations

import sys
from typing import Any

from loguru import logger

from cyberguide.config import settings


def _inject_defaults(record: dict[str, Any]) -> None:
    """Guarantee required ``extra`` keys exist for the log formatter."""

    extra = record.setdefault("extra", {})
    extra.setdefault("req", "")
    extra.setdefault("route", "")


def setup_logging() -> None:
    """Configure Loguru with a single structured stdout sink."""

    logger.remove()
    logger.configure(extra={"req": "", "route": ""}, patcher=_inject_defaults)
    fmt = (
        "{time:YYYY-MM-DDTHH:mm:ss.SSS} | {level} | "
        "req={extra[req]} | route={extra[route]} | msg={message}"
    )
    level = (settings.log_level or "INFO").upper()
    logger.add(
        sys.stdout,
        format=fmt,
        level=level,
        enqueue=settings.env != "test",
        backtrace=False,
        diagnose=False,
    )
