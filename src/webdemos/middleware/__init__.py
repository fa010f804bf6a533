"""
HTTP middleware used by the demo services.
"""

from .access_log import log_requests
from .annotation import annotation_middleware

__all__ = [
    "log_requests",
    "annotation_middleware",
]
