"""
Access log middleware installed on every demo service.
"""

import logging
import time

from fastapi import Request

logger = logging.getLogger(__name__)


async def log_requests(request: Request, call_next):
    """Log all incoming requests with their body sizes."""
    start_time = time.time()
    client = request.client.host if request.client else "-"
    request_size = request.headers.get("content-length", "-")

    logger.info(f"Request: {client} {request.method} {request.url.path} ({request_size} bytes)")

    response = await call_next(request)

    process_time = time.time() - start_time
    response_size = response.headers.get("content-length", "-")
    logger.info(
        f"Response: {request.method} {request.url.path} {response.status_code} "
        f"({response_size} bytes) - {process_time:.3f}s"
    )

    return response
