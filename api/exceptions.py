"""
Custom exceptions and error handling for the API module.
"""

from typing import Dict, Optional
from fastapi import HTTPException

from core.exceptions import MessageContractError


class APIException(HTTPException):
    """Base exception for API-related errors."""
    
    def __init__(
        self, 
        status_code: int, 
        error_type: str, 
        message: str, 
        details: Optional[Dict] = None
    ):
        self.error_type = error_type
        self.details = details
        super().__init__(status_code=status_code, detail=message)


class PayloadContractError(APIException):
    """Raised when a resolver returned an error the payload builder cannot represent."""
    
    def __init__(self, error: MessageContractError, endpoint: Optional[str] = None):
        details = {"entry": repr(error.entry), "entry_type": type(error.entry).__name__}
        if endpoint:
            details["endpoint"] = endpoint
        super().__init__(
            status_code=500,
            error_type="PayloadContractViolation",
            message=f"Payload contract violation: {error}",
            details=details
        )
