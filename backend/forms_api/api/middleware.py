"""Request Context Middleware — request id and access log for every request.

Invariants:
    - request.state.request_id is set before any route runs
    - An incoming X-Request-ID is reused; otherwise a fresh hex uuid is generated
    - Every response carries X-Request-ID
    - One access log line per completed request (method, path, status, duration)
"""

import logging
import time
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach a request id and log request completion."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        start_perf = time.perf_counter()

        response = await call_next(request)

        duration_ms = round((time.perf_counter() - start_perf) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response
