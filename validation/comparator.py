"""
Typed comparison of expected values against decoded API responses.

A field type map tells the comparator how to reconcile the stringified
expected value with the response value:

    user_fields = {"first_name": "string", "age": "integer", "inserted_at": "date"}
    expected = User(first_name="Lilo", age=6, inserted_at=...)
    assert_equivalent(expected, response.json()["result"], user_fields)

Transforms applied:

- field names are camelized to find the response value
- expected values are stringified (see `validation.stringify`)
- enum responses are compared against the upper-cased expected value
- numbers are parsed before comparison; textual responses must parse
  strictly and booleans never count as numbers
- dates are compared as instants, not as strings
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Union

from dateutil import parser as dateutil_parser

from core.casing import Camelizer, camelize
from validation.stringify import to_stringified_map


class FieldType(str, Enum):
    """Field types understood by the comparator."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ENUM = "enum"
    DATE = "date"
    LIST = "list"


FieldTypeMap = Mapping[str, Union[FieldType, str, "FieldTypeMap"]]

_INTEGER_PREFIX = re.compile(r"^\s*[+-]?\d+")


class ResponseMismatchError(AssertionError):
    """Raised when a response value does not match the expected value."""

    def __init__(self, field: str, field_type: Any, expected: Any, actual: Any, reason: str = ""):
        self.field = field
        self.field_type = field_type
        self.expected = expected
        self.actual = actual
        type_label = field_type.value if isinstance(field_type, FieldType) else field_type
        message = f"Field '{field}' ({type_label}) mismatch: expected {expected!r}, received {actual!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ResponseCountMismatchError(ResponseMismatchError):
    """Raised when an expected list and a response list differ in length."""

    def __init__(self, field: str, expected_count: int, actual: Any):
        self.expected_count = expected_count
        self.actual_count = len(actual)
        super().__init__(
            field,
            FieldType.LIST,
            expected_count,
            actual,
            reason=f"expected {expected_count} items, received {self.actual_count}",
        )


def assert_equivalent(
    expected: Any,
    response: Any,
    fields: FieldTypeMap,
    camelize: Camelizer = camelize,
    *,
    path: str = "",
) -> None:
    """
    Compare an expected list, mapping, model or dataclass to an API response.

    Args:
        expected: Expected value in native types
        response: Response value as decoded from JSON
        fields: Field name -> FieldType (or a nested field map for nested objects)
        camelize: Casing applied to field names to find response keys
        path: Location prefix used in failure messages

    Raises:
        ResponseMismatchError: If any declared field differs
        ResponseCountMismatchError: If list lengths differ
    """
    if isinstance(expected, (list, tuple)):
        label = path or "<root>"
        if not isinstance(response, list):
            raise ResponseMismatchError(label, FieldType.LIST, expected, response, reason="expected a list")
        if len(expected) != len(response):
            raise ResponseCountMismatchError(label, len(expected), response)
        for index, (expected_item, response_item) in enumerate(zip(expected, response)):
            assert_equivalent(
                expected_item, response_item, fields, camelize, path=f"{path}[{index}]"
            )
        return

    if not isinstance(response, Mapping):
        raise ResponseMismatchError(path or "<root>", "object", expected, response, reason="expected an object")

    stringified = to_stringified_map(expected)
    for field, field_type in fields.items():
        expected_value = stringified.get(str(field))
        response_value = _response_value(response, str(field), camelize)
        label = f"{path}.{field}" if path else str(field)

        if isinstance(field_type, Mapping):
            if expected_value in (None, "") and response_value is None:
                continue
            if not isinstance(expected_value, (Mapping, list)):
                raise ResponseMismatchError(label, "object", expected_value, response_value)
            assert_equivalent(expected_value, response_value, field_type, camelize, path=label)
        else:
            assert_values_match(label, _as_field_type(field_type), expected_value, response_value)


def assert_values_match(field: str, field_type: FieldType, expected: Any, response: Any) -> None:
    """Compare one stringified expected value with one response value."""
    # Null on the wire matches an expected None (stringified to "") for any type.
    if expected == "" and response is None:
        return

    if field_type is FieldType.DATE:
        if not _same_instant(expected, response):
            raise ResponseMismatchError(field, field_type, expected, response)
    elif field_type is FieldType.ENUM:
        if not isinstance(expected, str) or response not in (expected.upper(), expected):
            raise ResponseMismatchError(field, field_type, expected, response)
    elif field_type is FieldType.INTEGER:
        if not _numbers_match(expected, response, _parse_integer, int):
            raise ResponseMismatchError(field, field_type, expected, response)
    elif field_type is FieldType.FLOAT:
        if not _numbers_match(expected, response, float, float):
            raise ResponseMismatchError(field, field_type, expected, response)
    else:
        if to_stringified_map(expected) != to_stringified_map(response):
            raise ResponseMismatchError(field, field_type, expected, response)


def assert_similar_times(first: Any, second: Any) -> None:
    """Assert two ISO 8601 extended timestamps represent the same instant."""
    if not _same_instant(first, second):
        raise ResponseMismatchError("<time>", FieldType.DATE, first, second)


def _response_value(response: Mapping, field: str, camelize: Camelizer) -> Any:
    """Look up the camelized key, falling back to the field's native name."""
    key = camelize(field)
    if key in response:
        return response[key]
    return response.get(field)


def _as_field_type(field_type: Union[FieldType, str]) -> FieldType:
    try:
        return FieldType(field_type)
    except ValueError:
        raise ValueError(
            f"Unsupported field type {field_type!r}. "
            f"Supported types: {', '.join(item.value for item in FieldType)}"
        ) from None


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = dateutil_parser.isoparse(value)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _same_instant(first: Any, second: Any) -> bool:
    first_time = _parse_timestamp(first)
    second_time = _parse_timestamp(second)
    if first_time is None or second_time is None:
        return False
    return first_time == second_time


def _parse_integer(text: str) -> int:
    """Parse the leading integer of the text, e.g. "6" or "6.0" -> 6."""
    match = _INTEGER_PREFIX.match(text)
    if not match:
        raise ValueError(text)
    return int(match.group(0))


def _numbers_match(expected: Any, response: Any, parse_expected, parse_response) -> bool:
    """Parse the expected text leniently and a textual response strictly; booleans never match."""
    if isinstance(response, bool):
        return False
    expected_number = _parse_number(expected, parse_expected)
    response_number = _parse_number(response, parse_response)
    if expected_number is None or response_number is None:
        return False
    return expected_number == response_number


def _parse_number(value: Any, parse) -> Any:
    """Parse textual numbers and pass real numbers through; None when neither applies."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return parse(value)
        except ValueError:
            return None
    return None


__all__ = [
    "FieldType",
    "FieldTypeMap",
    "ResponseCountMismatchError",
    "ResponseMismatchError",
    "assert_equivalent",
    "assert_similar_times",
    "assert_values_match",
]
