"""
Common Pydantic schemas for API error responses.
"""
from typing import List, Optional
from pydantic import BaseModel


class FieldError(BaseModel):
    """A single request field that failed validation."""
    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    """Standard error response format."""
    error: str
    details: Optional[List[FieldError]] = None


class HealthResponse(BaseModel):
    """Liveness probe response."""
    status: str = "ok"
    service: str
