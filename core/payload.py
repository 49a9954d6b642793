"""
Mutation payload construction.

Mutation responses ("payloads") have three fields:

- `successful`: whether the mutation completed
- `messages`: validation messages, always empty on success
- `result`: the object created/updated/deleted, always None on failure

`normalize` turns whatever a resolver returned into a Payload. Resolvers can
return a domain object, a tagged variant from `core.results`, a raw
("ok"|"error", value) tuple, or an invalid change diff.

    normalize(user)                                   # success
    normalize(error("name taken"))                    # generic message
    normalize(error(ValidationMessage(code="required", key="first_name",
                                      message="can't be blank")))
    normalize(("error", ["too short", "too long"]))
    normalize(changeset)                              # if changeset invalid
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterable, List, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.casing import convert_key
from core.changes import extract_messages
from core.exceptions import MessageContractError
from core.logger import UnifiedLogger
from core.messages import ValidationMessage
from core.results import (
    ErrorList,
    ErrorMessage,
    ErrorText,
    InvalidDiff,
    as_message_entry,
    classify,
)

logger = UnifiedLogger(tag="payload")

KeyConverter = Callable[[ValidationMessage], ValidationMessage]


class Payload(BaseModel):
    """Canonical mutation response envelope."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    successful: bool = Field(..., description="Indicates if the mutation completed successfully or not")
    messages: List[ValidationMessage] = Field(
        default_factory=list,
        description="A list of failed validations. Empty when the mutation succeeded",
    )
    result: Any = Field(None, description="The object created/updated/deleted by the mutation")

    @model_validator(mode="after")
    def _check_exclusive(self) -> "Payload":
        if self.successful and self.messages:
            raise ValueError("a successful payload cannot carry messages")
        if not self.successful and self.result is not None:
            raise ValueError("a failed payload cannot carry a result")
        return self


def normalize(raw_result: Any, key_converter: KeyConverter = convert_key) -> Payload:
    """
    Convert a resolver's raw result into a mutation payload.

    Args:
        raw_result: Value returned by the resolver
        key_converter: Applied to every message (camelCases keys by default)

    Returns:
        Payload describing success or failure

    Raises:
        MessageContractError: If an error carries something other than
            ValidationMessage or text
    """
    result = classify(raw_result)

    if isinstance(result, ErrorMessage):
        return error_payload(result.message, key_converter)
    if isinstance(result, ErrorText):
        return error_payload(ValidationMessage.generic(result.text), key_converter)
    if isinstance(result, ErrorList):
        return error_payload(list(result.entries), key_converter)
    if isinstance(result, InvalidDiff):
        return error_payload(extract_messages(result.diff), key_converter)
    return success_payload(result.value)


def error_payload(
    messages: Union[ValidationMessage, str, Iterable[Union[ValidationMessage, str]]],
    key_converter: KeyConverter = convert_key,
) -> Payload:
    """
    Build a failed payload.

    Accepts a single ValidationMessage, mapping of its fields or text, or a
    list of those. Every message is passed through the key converter.
    """
    if isinstance(messages, (ValidationMessage, str, Mapping)):
        messages = [messages]

    prepared = [_prepare_message(message, key_converter) for message in messages]
    logger.debug(
        "Built error payload",
        codes=[message.code for message in prepared],
        keys=[message.key for message in prepared],
    )
    return Payload(successful=False, messages=prepared, result=None)


def success_payload(result: Any) -> Payload:
    """Build a successful payload around the mutated object."""
    return Payload(successful=True, messages=[], result=result)


def _prepare_message(message: Any, key_converter: KeyConverter) -> ValidationMessage:
    try:
        entry = as_message_entry(message)
    except MessageContractError:
        logger.error("Rejected unexpected validation message", entry=repr(message))
        raise

    if isinstance(entry, str):
        entry = ValidationMessage.generic(entry)
    return key_converter(entry)
