import pytest

from core.casing import camelize, convert_key
from core.messages import ValidationMessage


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("first_name", "firstName"),
        ("inserted_at", "insertedAt"),
        ("id", "id"),
        ("firstName", "firstName"),
        ("address_line_2", "addressLine2"),
        ("Name", "name"),
    ],
)
def test_camelize(value, expected):
    assert camelize(value) == expected


def test_convert_key_only_changes_key():
    message = ValidationMessage(
        code="required",
        key="first_name",
        field="first_name",
        message="can't be blank",
        value="",
    )

    converted = convert_key(message)

    assert converted.key == "firstName"
    assert converted.field == "first_name"
    assert converted.model_dump(exclude={"key"}) == message.model_dump(exclude={"key"})
    assert message.key == "first_name"


def test_convert_key_keeps_general_messages():
    message = ValidationMessage.generic("something went wrong")

    assert convert_key(message) == message


def test_convert_key_is_idempotent():
    message = ValidationMessage(code="required", key="last_name_initial", message="required")

    once = convert_key(message)

    assert convert_key(once) == once


def test_convert_key_accepts_custom_casing():
    message = ValidationMessage(code="required", key="first_name", message="required")

    converted = convert_key(message, camelize=str.upper)

    assert converted.key == "FIRST_NAME"
