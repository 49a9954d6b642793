"""
Tagged resolver results.

Resolvers may return an explicit variant or a bare value. `classify` maps any
raw result onto the closed set of variants consumed by the payload builder.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Tuple, Union

from pydantic import ValidationError

from core.changes import ChangeDiff, as_change_diff
from core.constants import ERROR_TAG, OK_TAG
from core.exceptions import MessageContractError
from core.messages import ValidationMessage


@dataclass(frozen=True)
class Success:
    """Successful mutation carrying its domain object."""

    value: Any


@dataclass(frozen=True)
class ErrorMessage:
    """Failure described by a single structured message."""

    message: ValidationMessage


@dataclass(frozen=True)
class ErrorText:
    """Failure described by plain text."""

    text: str


@dataclass(frozen=True)
class ErrorList:
    """Failure described by several messages and/or texts, in order."""

    entries: Tuple[Union[ValidationMessage, str], ...]


@dataclass(frozen=True)
class InvalidDiff:
    """Failure described by an invalid change diff."""

    diff: ChangeDiff


ResolverResult = Union[Success, ErrorMessage, ErrorText, ErrorList, InvalidDiff]

_VARIANTS = (Success, ErrorMessage, ErrorText, ErrorList, InvalidDiff)


def error(value: Any) -> ResolverResult:
    """
    Tag a resolver failure.

    Accepts a ValidationMessage, a mapping of ValidationMessage fields, a
    string, or a list/tuple of those.

    Raises:
        MessageContractError: If the value, or any list entry, is of another
            type or is a mapping that does not describe a ValidationMessage
    """
    if isinstance(value, str):
        return ErrorText(value)
    if isinstance(value, (ValidationMessage, Mapping)):
        return ErrorMessage(as_message_entry(value))
    if isinstance(value, (list, tuple)):
        return ErrorList(tuple(as_message_entry(entry) for entry in value))
    raise MessageContractError(value)


def as_message_entry(entry: Any) -> Union[ValidationMessage, str]:
    """
    Validate one error entry, building a ValidationMessage from a mapping.

    A mapping without a template or message uses its code as the text.
    """
    if isinstance(entry, (ValidationMessage, str)):
        return entry
    if isinstance(entry, Mapping):
        data = dict(entry)
        if data.get("template") is None and data.get("message") is None:
            data["message"] = data.get("code")
        try:
            return ValidationMessage.model_validate(data)
        except ValidationError as exc:
            raise MessageContractError(entry) from exc
    raise MessageContractError(entry)


def classify(raw: Any) -> ResolverResult:
    """
    Map a raw resolver result onto a tagged variant.

    Precedence: explicit variants, ("ok"|"error", value) tuples, invalid change
    diffs (including pydantic ValidationError), then anything else as success.
    """
    if isinstance(raw, _VARIANTS):
        return raw

    if _is_tagged_tuple(raw):
        tag, value = raw
        if tag == ERROR_TAG:
            return error(value)
        return Success(value)

    diff = as_change_diff(raw)
    if diff is not None and not diff.is_valid():
        return InvalidDiff(diff)

    return Success(raw)


def _is_tagged_tuple(raw: Any) -> bool:
    return (
        isinstance(raw, tuple)
        and len(raw) == 2
        and isinstance(raw[0], str)
        and raw[0] in (OK_TAG, ERROR_TAG)
    )
