"""
Payload integration for FastAPI endpoints.

`build_payload` plays the role of resolver middleware: it sits between the
endpoint function (the resolver) and FastAPI and converts whatever the
endpoint returned into a mutation payload.
"""

import functools
import inspect
import typing

from core.exceptions import MessageContractError
from core.payload import Payload, normalize

from .exceptions import APIException, PayloadContractError
from .utils import create_error_response, logger


def build_payload(func):
    """
    Wrap a mutation endpoint so its result is returned as a Payload.

    The endpoint may return a domain object, a tagged result from
    `core.results`, an ("ok"|"error", value) tuple or an invalid change diff:

        @router.post("/users", response_model=UserPayload)
        @build_payload
        async def create_user(params: CreateUserParams):
            changeset = users.create(params)
            if not changeset.is_valid():
                return changeset
            return users.get(changeset.changes_applied["id"])

    Errors that are neither messages nor text are programming errors; they are
    raised as PayloadContractError and surface as a 500 response.
    """
    endpoint = getattr(func, "__qualname__", repr(func))

    def _to_payload(value) -> Payload:
        try:
            return normalize(value)
        except MessageContractError as exc:
            logger.error("Endpoint returned an invalid error", endpoint=endpoint, entry=repr(exc.entry))
            raise PayloadContractError(exc, endpoint=endpoint) from exc

    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            return _to_payload(await func(*args, **kwargs))
    else:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            return _to_payload(func(*args, **kwargs))

    wrapper.__signature__ = _payload_signature(func)
    return wrapper


def _payload_signature(func) -> inspect.Signature:
    """
    Return the endpoint signature with resolved parameter annotations.

    The return annotation is dropped so FastAPI does not infer the domain type
    as the response model; routes declare `response_model` explicitly.
    """
    signature = inspect.signature(func)
    hints = typing.get_type_hints(func, include_extras=True)
    parameters = [
        parameter.replace(annotation=hints.get(name, parameter.annotation))
        for name, parameter in signature.parameters.items()
    ]
    return signature.replace(parameters=parameters, return_annotation=inspect.Signature.empty)


def register_exception_handlers(app):
    """Register exception handlers with the FastAPI app."""

    @app.exception_handler(APIException)
    async def api_exception_handler(request, exc: APIException):
        """Handle API-specific exceptions with proper error responses."""
        return create_error_response(exc)

    @app.exception_handler(MessageContractError)
    async def contract_exception_handler(request, exc: MessageContractError):
        """Handle contract violations raised outside build_payload."""
        return create_error_response(PayloadContractError(exc, endpoint=request.url.path))

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc: Exception):
        """Handle unexpected exceptions with generic error responses."""
        return create_error_response(exc)
