"""
Web framework feature demos.

Small, independent programs that each wire one web-framework feature to one
route or console command.

Modules:
    validation: rule-expression validator and its console demo
    context: request-scoped key/value store
    middleware: annotation/timing middleware and the access log
    multipart: multipart form parsing and uploaded file persistence
    services: one FastAPI application per demo
    config: pydantic-settings configuration
"""

__version__ = "0.1.0"
__author__ = "webdemos contributors"
