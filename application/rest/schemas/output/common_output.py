"""Common output schemas for API responses.

This module contains shared Pydantic models for common API responses
like error messages and status information.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Schema for error responses across all endpoints.

    Attributes:
        detail (str): Detailed error message.
        error_code (str, optional): Specific error code for categorization.

    Example:
        >>> error_response = ErrorResponse(
        ...     detail="Resource not found",
        ...     error_code="NOT_FOUND"
        ... )
    """

    detail: str
    error_code: Optional[str] = None


class FieldFailuresResponse(ErrorResponse):
    """Schema for requests rejected because of invalid fields.

    Attributes:
        failures (Dict[str, List[str]]): Messages per rejected field.

    Example:
        >>> FieldFailuresResponse(
        ...     detail="Request has invalid fields",
        ...     error_code="INVALID_FIELDS",
        ...     failures={"name": ["Name is required."]},
        ... )
    """

    failures: Dict[str, List[str]]


class MessageResponse(BaseModel):
    """Schema for simple message responses.

    Attributes:
        message (str): Success or informational message.
    """

    message: str


class HealthResponse(BaseModel):
    """Schema for health check responses.

    Attributes:
        status (str): Service health status.
        service (str): Service name identifier.
    """

    status: str
    service: str
