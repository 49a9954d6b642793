"""
Key casing helpers.

Validation producers report fields in snake_case while API consumers expect
lowerCamelCase. The casing function is passed explicitly wherever it is used
so callers can swap the policy.
"""

from __future__ import annotations

from typing import Callable

from core.messages import ValidationMessage


Camelizer = Callable[[str], str]


def camelize(value: str) -> str:
    """
    Convert an underscore-delimited identifier to lowerCamelCase.

    Already camelized identifiers pass through unchanged, so the conversion
    is idempotent.

    Examples:
        first_name -> firstName
        inserted_at -> insertedAt
        firstName -> firstName
    """
    words = [word for word in value.split("_") if word]
    if not words:
        return value

    head, *tail = words
    return head[:1].lower() + head[1:] + "".join(word[:1].upper() + word[1:] for word in tail)


def convert_key(message: ValidationMessage, camelize: Camelizer = camelize) -> ValidationMessage:
    """Return a copy of the message with its key in the consumer's casing."""
    if message.key is None:
        return message
    return message.model_copy(update={"key": camelize(message.key)})
