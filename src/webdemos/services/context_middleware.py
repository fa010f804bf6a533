"""
Context middleware demo service.

Every request passes through the annotation middleware, which traces the
start and end of the request and stores a fixed annotation in the request
context. ``GET /ce`` reads the annotation back.
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI

from ..config.settings import AppConfig, get_config
from ..context import RequestContext, get_request_context
from ..middleware import annotation_middleware
from ..schemas import AnnotationResponse
from .base import build_app

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Create the context middleware demo application."""
    config = config or get_config()
    key = config.middleware.annotation_key

    app = build_app(
        "Context middleware demo",
        "Request-scoped annotation written by a middleware and read by a handler",
    )
    app.middleware("http")(annotation_middleware(key, config.middleware.annotation_value))

    @app.get("/ce", response_model=AnnotationResponse)
    async def read_annotation(context: RequestContext = Depends(get_request_context)):
        """Return the annotation the middleware attached to this request."""
        value, exists = context.get(key)
        if exists:
            logger.info(f"Annotation {key!r} found: {value}")
        else:
            logger.warning(f"Annotation {key!r} missing from request context")
        return AnnotationResponse(request=value)

    return app
