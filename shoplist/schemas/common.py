"""
Shoplist Backend: Shared Response Schemas
==========================================

What:  The error envelope returned by every failing endpoint.
Who:   Referenced in route `responses=` declarations for OpenAPI docs; the
       exception handlers in main.py emit the same shape.

Example:
    {
        "error": "not_found",
        "message": "shopping list item with ID 'abc123' was not found",
        "request_id": "1f2e3d4c"
    }
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standardized error response format for all API errors."""
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
