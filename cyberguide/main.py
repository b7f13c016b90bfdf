"""Application factory for the Cyber Guide recap API."""

from __future__ import annotations

from fastapi import FastAPI

from cyberguide.config import settings
from cyberguide.domain.errors import add_exception_handlers
from cyberguide.instrumentation.middleware import TraceRequestMiddleware
from cyberguide.instrumentation.trace import tracepoint
from cyberguide.logging_setup import setup_logging
from cyberguide.policy.recap_ruleset import RULES


def create_app() -> FastAPI:
    """Initialise and configure the FastAPI application."""

    setup_logging()
    tracepoint("recap.ruleset", provider=settings.llm_provider, rules=len(RULES))

    app = FastAPI(title="Cyber Guide Recap API", version="0.1.0")
    add_exception_handlers(app)
    app.add_middleware(TraceRequestMiddleware)
    from cyberguide.routes import recap_routes

    app.include_router(recap_routes.router)
    return app


app = create_app()
