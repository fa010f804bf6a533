#!/usr/bin/env python3
"""
Command line entry point for the web framework demos.

    webdemos validate "admin#admin.com" --rules "required,email"
    webdemos serve middleware
"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from .config.settings import configure_logging, get_config
from .services import SERVICES
from .validation import run_validation_demo

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="webdemos", description="Web framework feature demos")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Validate one value against a rule expression")
    validate.add_argument("value", nargs="?", default="admin#admin.com", help="Value to validate")
    validate.add_argument("--rules", default="required,email", help="Rule expression (default: required,email)")

    serve = subparsers.add_parser("serve", help="Run one demo service")
    serve.add_argument("service", choices=sorted(SERVICES), help="Service to run")
    serve.add_argument("--host", default=None, help="Bind address (default: API_HOST)")
    serve.add_argument("--port", type=int, default=None, help="Bind port (default: API_PORT)")

    return parser


def serve(service: str, host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Start a demo service with uvicorn."""
    config = get_config()
    host = host or config.api.host
    port = port or config.api.port

    logger.info(f"Starting {service} demo on {host}:{port}")
    logger.info(f"Environment: {config.environment}")
    logger.info(f"Reload: {config.api.reload}")

    uvicorn.run(
        SERVICES[service],
        factory=True,
        host=host,
        port=port,
        reload=config.api.reload,
        log_level=config.logging.level.lower(),
        access_log=True,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    if args.command == "validate":
        return run_validation_demo(args.value, args.rules)

    try:
        serve(args.service, args.host, args.port)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
