"""
Utility functions for API operations.
"""

import traceback
from fastapi.responses import JSONResponse

from .models import ErrorResponse
from .exceptions import APIException
from core.logger import UnifiedLogger
from core.settings import is_debug_enabled

# Create API logger
logger = UnifiedLogger(tag="api")


def create_error_response(exception: Exception) -> JSONResponse:
    """
    Create a standardized error response from an exception.

    Args:
        exception: The exception that occurred

    Returns:
        JSONResponse with standardized error format
    """
    if isinstance(exception, APIException):
        logger.error(
            f"API error: {exception.error_type}",
            status_code=exception.status_code,
            details=exception.details,
        )
        error_response = ErrorResponse(
            error=exception.error_type,
            message=exception.detail,
            details=exception.details
        )
        return JSONResponse(
            status_code=exception.status_code,
            content=error_response.model_dump()
        )

    if is_debug_enabled():
        # Include full traceback for debugging
        error_response = ErrorResponse(
            error="InternalServerError",
            message=str(exception),
            details={
                "error_type": type(exception).__name__,
                "traceback": "".join(traceback.format_exception(exception)),
            }
        )
    else:
        # Generic error for production
        error_response = ErrorResponse(
            error="InternalServerError",
            message="An unexpected error occurred",
            details={"error_type": type(exception).__name__}
        )

    # Always log the full traceback server-side
    logger.error(f"Unexpected API error: {''.join(traceback.format_exception(exception))}")

    return JSONResponse(
        status_code=500,
        content=error_response.model_dump()
    )
