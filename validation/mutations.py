"""
Assertions for mutation payload responses.

Payload responses are produced by `api.endpoints.build_payload` and decoded
from JSON before being checked here.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from validation.comparator import FieldType, FieldTypeMap, ResponseMismatchError, assert_equivalent


def validation_message_fields(only: Optional[Iterable[str]] = None) -> Dict[str, FieldType]:
    """
    Mapping of ValidationMessage fields used by `assert_mutation_failure`.

    Args:
        only: Optional subset of field names to keep. Use this when the
            response selects fewer fields.
    """
    fields = {
        "field": FieldType.STRING,
        "message": FieldType.STRING,
        "code": FieldType.STRING,
        "template": FieldType.STRING,
        "options": FieldType.LIST,
        "key": FieldType.STRING,
        "value": FieldType.STRING,
    }
    if only is None:
        return fields
    return {name: fields[name] for name in only if name in fields}


def assert_mutation_success(expected: Any, payload: Mapping[str, Any], fields: FieldTypeMap) -> None:
    """Compare an expected object to a successful mutation payload response."""
    _assert_envelope_value(payload, "successful", True)
    _assert_envelope_value(payload, "messages", [])

    assert_equivalent(expected, payload.get("result"), fields, path="result")


def assert_mutation_failure(
    expected: Any,
    payload: Mapping[str, Any],
    only: Optional[Iterable[str]] = None,
) -> None:
    """
    Compare a list of expected validation messages to a failed mutation payload response.

    Expected messages may be ValidationMessage models or plain mappings. By
    default every ValidationMessage field is compared; pass `only` to narrow
    the comparison.
    """
    _assert_envelope_value(payload, "successful", False)
    _assert_envelope_value(payload, "result", None)

    assert_equivalent(expected, payload.get("messages"), validation_message_fields(only), path="messages")


def _assert_envelope_value(payload: Mapping[str, Any], name: str, expected: Any) -> None:
    if not isinstance(payload, Mapping):
        raise ResponseMismatchError("<payload>", "payload", "an object", payload)
    actual = payload.get(name)
    if actual != expected or type(actual) is not type(expected):
        raise ResponseMismatchError(name, "payload", expected, actual)
