"""
Pydantic response models shared by the demo services.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    error_code: str = Field(..., description="Error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class AnnotationResponse(BaseModel):
    """Body of the context middleware demo route."""
    request: Optional[Any] = Field(None, description="Annotation found in the request context, or null")
