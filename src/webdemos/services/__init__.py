"""
One FastAPI application per demo.

``SERVICES`` maps a service name to the import path of its application
factory, the form uvicorn expects with ``factory=True``.
"""

SERVICES = {
    "middleware": "webdemos.services.context_middleware:create_app",
    "redirect": "webdemos.services.redirect:create_app",
    "upload": "webdemos.services.upload:create_app",
    "multi-upload": "webdemos.services.multi_upload:create_app",
}

__all__ = ["SERVICES"]
