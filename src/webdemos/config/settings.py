"""
Configuration management for the web framework demos.

This module holds every tunable of the demo services (bind address, multipart
memory threshold, upload directories, middleware annotation, redirect target
and logging) using Pydantic settings. Values come from the environment or a
local .env file.
"""

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Load environment variables from .env file
load_dotenv()

# 8 MiB, the amount of a multipart body kept in memory before spilling to disk
DEFAULT_MAX_MULTIPART_MEMORY = 8 << 20


class APIConfig(BaseSettings):
    """API server configuration."""

    host: str = "0.0.0.0"
    port: int = 8003
    reload: bool = False

    class Config:
        env_prefix = "API_"
        case_sensitive = False
        extra = "ignore"

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate the TCP port range."""
        if v < 1 or v > 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v


class UploadConfig(BaseSettings):
    """Multipart upload configuration."""

    max_multipart_memory: int = Field(
        DEFAULT_MAX_MULTIPART_MEMORY,
        description="Bytes of each uploaded file kept in memory before spooling to a temporary file",
    )
    save_dir: Path = Field(Path("."), description="Destination of the single-file upload service")
    upload_dir: Path = Field(Path("./uploads"), description="Destination of the multi-file upload service")
    single_field: str = "file"
    multi_field: str = "files"

    class Config:
        env_prefix = "UPLOAD_"
        case_sensitive = False
        extra = "ignore"

    @field_validator("max_multipart_memory")
    @classmethod
    def validate_memory(cls, v: int) -> int:
        """Validate the in-memory threshold."""
        if v <= 0:
            raise ValueError("Multipart memory threshold must be positive")
        return v


class MiddlewareConfig(BaseSettings):
    """Annotation attached to every request by the context middleware."""

    annotation_key: str = "request"
    annotation_value: str = "中间件"

    class Config:
        env_prefix = "MIDDLEWARE_"
        case_sensitive = False
        extra = "ignore"


class RedirectConfig(BaseSettings):
    """Redirect service configuration."""

    target_url: str = "http://www.5lmh.com"
    status_code: int = 301

    class Config:
        env_prefix = "REDIRECT_"
        case_sensitive = False
        extra = "ignore"

    @field_validator("status_code")
    @classmethod
    def validate_status_code(cls, v: int) -> int:
        """Only 3xx codes are redirects."""
        if v < 300 or v > 399:
            raise ValueError("Redirect status code must be a 3xx code")
        return v


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_prefix = "LOG_"
        case_sensitive = False
        extra = "ignore"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate the logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown logging level: {v}")
        return level


class AppConfig(BaseSettings):
    """Main application configuration."""

    environment: str = "development"

    # Sub-configurations
    api: APIConfig
    upload: UploadConfig
    middleware: MiddlewareConfig
    redirect: RedirectConfig
    logging: LoggingConfig

    def __init__(self, **kwargs):
        # Sub-configurations not passed explicitly are read from the environment
        kwargs.setdefault("api", APIConfig())
        kwargs.setdefault("upload", UploadConfig())
        kwargs.setdefault("middleware", MiddlewareConfig())
        kwargs.setdefault("redirect", RedirectConfig())
        kwargs.setdefault("logging", LoggingConfig())
        super().__init__(**kwargs)

    class Config:
        case_sensitive = False
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra environment variables

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


# Global configuration instance
config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global configuration instance.

    Returns:
        AppConfig: The application configuration instance.
    """
    global config
    if config is None:
        config = AppConfig()
    return config


def reload_config() -> AppConfig:
    """
    Reload the configuration from environment variables.

    Returns:
        AppConfig: The reloaded application configuration instance.
    """
    global config
    config = AppConfig()
    return config


def configure_logging(logging_config: Optional[LoggingConfig] = None) -> None:
    """Apply the logging configuration to the root logger."""
    logging_config = logging_config or get_config().logging
    logging.basicConfig(level=logging_config.level, format=logging_config.format)
