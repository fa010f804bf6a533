"""
Context annotation middleware.

Brackets every request with a "started" and a "finished" trace, attaches a
fixed key/value annotation to the request context before the handler runs,
and reports the handler's status code and elapsed wall-clock time after it
returns.
"""

import logging
import time
from typing import Any, Awaitable, Callable

from fastapi import Request, Response

from ..context import get_request_context

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]


def annotation_middleware(key: str, value: Any) -> Callable[[Request, CallNext], Awaitable[Response]]:
    """
    Build an HTTP middleware that annotates each request with ``key=value``.

    Register it with ``app.middleware("http")(annotation_middleware(...))``.
    """

    async def annotate_request(request: Request, call_next: CallNext) -> Response:
        start_time = time.perf_counter()
        logger.info(f"Middleware started: {request.method} {request.url.path}")

        get_request_context(request).set(key, value)

        response = await call_next(request)

        logger.info(f"Middleware finished: status {response.status_code}")
        elapsed = time.perf_counter() - start_time
        logger.info(f"Middleware elapsed: {elapsed * 1000:.3f}ms")
        return response

    return annotate_request
