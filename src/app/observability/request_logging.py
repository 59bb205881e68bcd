"""Middleware HTTP: correlation_id por requisição e log de acesso."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.observability.correlation import (
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.requests import Request
    from starlette.responses import Response

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "x-correlation-id"


async def correlation_and_access_log(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Define correlation_id, ecoa no header da resposta e loga a requisição."""
    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))
    started_at = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers[CORRELATION_HEADER] = get_correlation_id()
        return response
    finally:
        logger.info(
            "http_request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": status_code,
                "duration_ms": round((time.perf_counter() - started_at) * 1000, 2),
            },
        )
        reset_correlation_id(token)
