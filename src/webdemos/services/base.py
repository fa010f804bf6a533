"""
Application factory shared by the demo services.

Every service starts from the same default stack: an access log middleware
and a recovery handler turning unhandled exceptions into a structured 500
response.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .. import __version__
from ..middleware import log_requests
from ..schemas import ErrorResponse

logger = logging.getLogger(__name__)


def build_app(title: str, description: str = "") -> FastAPI:
    """
    Create a FastAPI application with the default middleware stack.

    Args:
        title: Application title, also used in lifecycle logs
        description: OpenAPI description

    Returns:
        The configured application, without routes
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager for startup and shutdown events."""
        logger.info(f"Starting {title}...")
        yield
        logger.info(f"Shutting down {title}...")

    app = FastAPI(
        title=title,
        description=description,
        version=__version__,
        lifespan=lifespan,
    )

    app.middleware("http")(log_requests)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions with structured error responses."""
        logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="Internal server error",
                error_code="INTERNAL_ERROR",
                details={"message": str(exc)}
            ).model_dump()
        )

    return app
