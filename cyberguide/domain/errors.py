"""Domain-specific exception hierarchy and FastAPI handlers."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cyberguide.application.error_handlers import render_failure
from cyberguide.instrumentation.trace import trace_exception


class AppError(Exception):
    """Base class for domain errors with structured metadata."""

    status_code: int = 400
    code: str = "app_error"
    message: str = "Application error"

    def __init__(self, message: str | None = None, *, code: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code


class ValidationError(AppError):
    """Raised when input payloads fail validation."""

    status_code = 422
    code = "validation_error"
    message = "Invalid input"


class ExternalServiceError(AppError):
    """Raised when an upstream dependency fails."""

    status_code = 502
    code = "external_service_error"
    message = "Upstream service failed"


class GeneratorTimeoutError(ExternalServiceError):
    """Raised when the text generator does not answer within its time budget."""

    status_code = 504
    code = "ai_timeout"
    message = "Text generator timed out"


def add_exception_handlers(app: FastAPI) -> None:
    """Register handlers that render every failure as the uniform error envelope."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        trace_exception("recap.rejected", exc, route=request.url.path)
        return JSONResponse(status_code=exc.status_code, content=render_failure(exc.code, exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        trace_exception("request_validation", exc)
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg") or "Invalid input"
        if location:
            message = f"{location}: {message}"
        return JSONResponse(status_code=422, content=render_failure("validation_error", message))

    @app.exception_handler(HTTPException)
    async def http_exc_handler(_: Request, exc: HTTPException) -> JSONResponse:
        trace_exception("http_exception", exc, detail=exc.detail)
        return JSONResponse(status_code=exc.status_code, content=render_failure("http_error", str(exc.detail)))
