"""
Common API Schemas

Shared Pydantic models used across all API routers.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response model for all API errors.

    Provides consistent error structure across all endpoints.

    Attributes:
        code: Machine-readable error code (e.g., "INVALID_INPUT", "REQUEST_NOT_FOUND")
        message: Human-readable error message
        details: Optional additional error details (validation errors, debug info)
    """

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional error context"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "code": "REQUEST_NOT_FOUND",
                "message": "RequestNotFoundError: Request 'req-1' not found or expired",
                "details": {"exception_type": "RequestNotFoundError", "request_id": "req-1"},
            }
        }
