from __future__ import annotations

from time import perf_counter
from typing import Awaitable, Callable
from uuid import uuid4

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from cyberguide.instrumentation.trace import bind_request_id, release_request_id

REQUEST_ID_HEADER = "X-Request-Id"


class TraceRequestMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log one access line.

    The id is bound for trace events and as loguru context, so fallback
    warnings raised while building a recap carry it as ``req``.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        route = request.url.path
        token = bind_request_id(request_id)
        started = perf_counter()
        status = 500

        try:
            with logger.contextualize(req=request_id, route=route):
                response = await call_next(request)
                status = response.status_code
                response.headers[REQUEST_ID_HEADER] = request_id
                return response
        finally:
            logger.bind(req=request_id, route=route).info(
                "access method={} status={} ms={:.1f}",
                request.method,
                status,
                (perf_counter() - started) * 1000,
            )
            release_request_id(token)
