from datetime import datetime, timezone

import pytest

from validation.comparator import (
    FieldType,
    ResponseCountMismatchError,
    ResponseMismatchError,
    assert_equivalent,
    assert_similar_times,
)
from validation.stringify import NOT_LOADED, to_stringified_map
from tests.models import Pet, User


def test_integer_response_matches():
    assert_equivalent({"age": 6}, {"age": 6}, {"age": FieldType.INTEGER})


def test_integer_response_as_text_matches():
    assert_equivalent({"age": 6}, {"age": "6"}, {"age": FieldType.INTEGER})


@pytest.mark.parametrize("response", ["6.9", "6abc", "six"])
def test_integer_response_text_must_be_a_whole_number(response):
    with pytest.raises(ResponseMismatchError):
        assert_equivalent({"age": 6}, {"age": response}, {"age": FieldType.INTEGER})


def test_boolean_response_is_not_a_number():
    with pytest.raises(ResponseMismatchError):
        assert_equivalent({"age": 1}, {"age": True}, {"age": "integer"})
    with pytest.raises(ResponseMismatchError):
        assert_equivalent({"weight": 1.0}, {"weight": True}, {"weight": "float"})
    with pytest.raises(ResponseMismatchError):
        assert_equivalent({"age": 0}, {"age": False}, {"age": "integer"})


def test_integer_mismatch_names_the_field():
    with pytest.raises(ResponseMismatchError) as excinfo:
        assert_equivalent({"age": 6}, {"age": 7}, {"age": FieldType.INTEGER})

    assert excinfo.value.field == "age"
    assert excinfo.value.expected == "6"
    assert excinfo.value.actual == 7
    assert "age" in str(excinfo.value)


def test_mismatch_is_an_assertion_error():
    with pytest.raises(AssertionError):
        assert_equivalent({"age": 6}, {"age": 7}, {"age": "integer"})


def test_field_names_are_camelized(lilo, user_fields):
    response = {
        "id": 1,
        "firstName": "Lilo",
        "lastName": "Pelekai",
        "age": 6,
        "planet": "EARTH",
        "insertedAt": "2024-05-01T12:30:00Z",
    }

    assert_equivalent(lilo, response, user_fields)


def test_wrong_casing_in_response_fails(lilo):
    with pytest.raises(ResponseMismatchError):
        assert_equivalent(lilo, {"firstName": "lilo"}, {"first_name": "string"})


def test_float_fields():
    pet = Pet(name="Stitch", species="alien", weight=12.5)

    assert_equivalent(pet, {"weight": 12.5}, {"weight": "float"})
    assert_equivalent(pet, {"weight": "12.5"}, {"weight": "float"})
    with pytest.raises(ResponseMismatchError):
        assert_equivalent(pet, {"weight": 12.0}, {"weight": "float"})


def test_enum_response_is_upper_case():
    assert_equivalent({"planet": "turo"}, {"planet": "TURO"}, {"planet": "enum"})
    with pytest.raises(ResponseMismatchError):
        assert_equivalent({"planet": "turo"}, {"planet": "Turo"}, {"planet": "enum"})


def test_dates_compare_as_instants():
    expected = {"inserted_at": datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)}

    assert_equivalent(expected, {"insertedAt": "2024-05-01T14:30:00+02:00"}, {"inserted_at": "date"})
    with pytest.raises(ResponseMismatchError):
        assert_equivalent(expected, {"insertedAt": "2024-05-01T12:31:00Z"}, {"inserted_at": "date"})


def test_unparseable_date_fails():
    with pytest.raises(ResponseMismatchError):
        assert_equivalent({"at": "2024-05-01T12:30:00Z"}, {"at": "yesterday"}, {"at": "date"})


def test_booleans_compare_as_text():
    assert_equivalent({"active": True}, {"active": True}, {"active": "boolean"})
    assert_equivalent({"active": False}, {"active": "false"}, {"active": "boolean"})
    with pytest.raises(ResponseMismatchError):
        assert_equivalent({"active": False}, {"active": True}, {"active": "boolean"})


def test_list_fields_compare_structurally():
    expected = {"tags": ["a", 1]}

    assert_equivalent(expected, {"tags": ["a", 1]}, {"tags": "list"})
    with pytest.raises(ResponseMismatchError):
        assert_equivalent(expected, {"tags": ["a"]}, {"tags": "list"})


def test_null_response_matches_none_for_any_type():
    expected = {"age": None, "last_name": None, "inserted_at": None}
    response = {"age": None, "lastName": None, "insertedAt": None}

    assert_equivalent(expected, response, {"age": "integer", "last_name": "string", "inserted_at": "date"})


def test_lists_compare_elementwise():
    expected = [{"age": 6}, {"age": 19}]

    assert_equivalent(expected, [{"age": 6}, {"age": "19"}], {"age": "integer"})
    with pytest.raises(ResponseMismatchError) as excinfo:
        assert_equivalent(expected, [{"age": 6}, {"age": 20}], {"age": "integer"})

    assert excinfo.value.field == "[1].age"


def test_list_length_mismatch_reports_counts():
    expected = [{"age": 6}, {"age": 19}]

    with pytest.raises(ResponseCountMismatchError) as excinfo:
        assert_equivalent(expected, [{"age": 6}], {"age": "integer"})

    assert excinfo.value.expected_count == 2
    assert excinfo.value.actual_count == 1
    assert "expected 2 items, received 1" in str(excinfo.value)


def test_list_expected_but_object_received():
    with pytest.raises(ResponseMismatchError) as excinfo:
        assert_equivalent([{"age": 6}], {"age": 6}, {"age": "integer"})

    assert not isinstance(excinfo.value, ResponseCountMismatchError)


def test_nested_objects_use_nested_field_maps():
    expected = {"owner": {"first_name": "Nani", "age": 19}, "pets": [{"pet_name": "Stitch"}]}
    response = {"owner": {"firstName": "Nani", "age": 19}, "pets": [{"petName": "Stitch"}]}
    fields = {
        "owner": {"first_name": "string", "age": "integer"},
        "pets": {"pet_name": "string"},
    }

    assert_equivalent(expected, response, fields)

    response["pets"][0]["petName"] = "Angel"
    with pytest.raises(ResponseMismatchError) as excinfo:
        assert_equivalent(expected, response, fields)
    assert excinfo.value.field == "pets[0].pet_name"


@pytest.mark.parametrize("owner", [None, NOT_LOADED])
def test_missing_nested_object_against_response_object(owner):
    fields = {"owner": {"first_name": "string"}}

    assert_equivalent({"owner": None}, {"owner": None}, fields)
    with pytest.raises(ResponseMismatchError) as excinfo:
        assert_equivalent({"owner": owner}, {"owner": {"firstName": "Nani"}}, fields)

    assert excinfo.value.field == "owner"
    assert excinfo.value.actual == {"firstName": "Nani"}


def test_round_trip_against_stringified_expected(lilo, user_fields):
    assert_equivalent(lilo, to_stringified_map(lilo), user_fields)


def test_unknown_field_type_is_rejected():
    with pytest.raises(ValueError):
        assert_equivalent({"age": 6}, {"age": 6}, {"age": "decimal"})


def test_custom_casing_function():
    assert_equivalent({"first_name": "Lilo"}, {"FIRST_NAME": "Lilo"}, {"first_name": "string"}, camelize=str.upper)


def test_assert_similar_times():
    assert_similar_times("2024-05-01T12:30:00Z", "2024-05-01T12:30:00.000+00:00")
    with pytest.raises(AssertionError):
        assert_similar_times("2024-05-01T12:30:00Z", "2024-05-02T12:30:00Z")


def test_user_models_compare_against_json(lilo, user_fields):
    response = User.model_validate(lilo.model_dump()).model_dump(mode="json")
    response = {"firstName" if key == "first_name" else key: value for key, value in response.items()}

    assert_equivalent(lilo, response, user_fields)
