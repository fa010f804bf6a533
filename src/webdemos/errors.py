"""
Exception hierarchy shared by the demos.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .validation import FieldError


class WebDemosError(Exception):
    """Base exception for demo operations."""
    pass


class RuleSyntaxError(WebDemosError):
    """Raised when a rule expression cannot be parsed."""
    pass


class ValidationErrors(WebDemosError):
    """Raised when one or more rules fail for a validated value."""

    def __init__(self, errors: List["FieldError"]):
        self.errors = list(errors)
        super().__init__("\n".join(e.error() for e in self.errors))

    def __iter__(self):
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


class MultipartParseError(WebDemosError):
    """Raised when a request body is not a readable multipart form."""
    pass


class UploadSaveError(WebDemosError):
    """Raised when an uploaded file cannot be written to its destination."""
    pass
