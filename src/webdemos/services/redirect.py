"""
Redirect demo service: ``GET /index`` answers with a permanent redirect.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from ..config.settings import AppConfig, get_config
from .base import build_app

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Create the redirect demo application."""
    config = config or get_config()
    target_url = config.redirect.target_url
    status_code = config.redirect.status_code

    app = build_app("Redirect demo", "Fixed HTTP redirect")

    @app.get("/index")
    async def redirect_index():
        logger.info(f"Redirecting to {target_url} ({status_code})")
        return RedirectResponse(url=target_url, status_code=status_code)

    return app
