"""
Pydantic models for API response schemas.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, Optional, Type

from pydantic import BaseModel, Field, create_model

from core.payload import Payload


#######################################################################
## Response Models
#######################################################################

@lru_cache(maxsize=None)
def payload_model(name: str, result_model: Type[BaseModel]) -> Type[Payload]:
    """
    Create a typed payload model for a mutated object.

    Each object that can be mutated needs its own response model in order to
    return typed responses:

        UserPayload = payload_model("UserPayload", User)

        @router.post("/users", response_model=UserPayload)
        @build_payload
        def create_user(params: CreateUserParams): ...

    Args:
        name: Name of the generated model (shown in the OpenAPI schema)
        result_model: Model of the object created/updated/deleted

    Returns:
        Payload subclass whose `result` is typed as Optional[result_model]
    """
    return create_model(
        name,
        __base__=Payload,
        result=(
            Optional[result_model],
            Field(None, description="The object created/updated/deleted by the mutation"),
        ),
    )


class ErrorResponse(BaseModel):
    """Standard error response model."""
    success: bool = Field(False, description="Always false for error responses")
    error: str = Field(..., description="Error type or category")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict] = Field(None, description="Additional error details")
