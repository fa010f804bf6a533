"""
Configuration management package for the web framework demos.
"""

from .settings import (
    get_config,
    reload_config,
    AppConfig,
    APIConfig,
    UploadConfig,
    MiddlewareConfig,
    RedirectConfig,
    LoggingConfig,
    configure_logging,
)

__all__ = [
    "get_config",
    "reload_config",
    "AppConfig",
    "APIConfig",
    "UploadConfig",
    "MiddlewareConfig",
    "RedirectConfig",
    "LoggingConfig",
    "configure_logging",
]
