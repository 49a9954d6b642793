from datetime import date, datetime, timezone

from validation.stringify import NOT_LOADED, NotLoaded, to_stringified_map
from tests.models import Pet, Planet, User


def test_model_fields_become_strings(lilo):
    assert to_stringified_map(lilo) == {
        "id": "1",
        "first_name": "Lilo",
        "last_name": "Pelekai",
        "age": "6",
        "planet": "earth",
        "inserted_at": "2024-05-01T12:30:00+00:00",
    }


def test_special_leaves():
    fixture = {
        "missing": None,
        "active": True,
        "deleted": False,
        "born_on": date(2018, 2, 3),
        "owner": NOT_LOADED,
        "planet": Planet.TURO,
    }

    assert to_stringified_map(fixture) == {
        "missing": "",
        "active": "true",
        "deleted": "false",
        "born_on": "2018-02-03",
        "owner": "association",
        "planet": "turo",
    }


def test_nested_structures_are_preserved():
    fixture = {"pets": [Pet(name="Stitch", species="alien", weight=12.5)], "tags": ["a", 1]}

    assert to_stringified_map(fixture) == {
        "pets": [{"name": "Stitch", "species": "alien", "weight": "12.5"}],
        "tags": ["a", "1"],
    }


def test_private_attributes_are_dropped():
    class Record:
        def __init__(self):
            self.name = "Nani"
            self._meta = {"state": "loaded"}

    assert to_stringified_map(Record()) == {"name": "Nani"}


def test_stringifying_is_idempotent(lilo):
    once = to_stringified_map(lilo)

    assert to_stringified_map(once) == once


def test_not_loaded_is_a_singleton():
    assert NotLoaded() is NOT_LOADED


def test_naive_datetimes_keep_iso_format():
    value = datetime(2024, 1, 2, 3, 4, 5)

    assert to_stringified_map({"at": value}) == {"at": "2024-01-02T03:04:05"}
    assert to_stringified_map({"at": value.replace(tzinfo=timezone.utc)})["at"].endswith("+00:00")
