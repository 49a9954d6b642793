"""
Stringification of expected values.

Serialized API responses round-trip most scalars through text, and the
stringifier has no insight into the schema, so every leaf becomes a string.
The comparator compensates using the declared field types.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from pydantic import BaseModel

from core.constants import ASSOCIATION_PLACEHOLDER


class NotLoaded:
    """Placeholder for an association that was never loaded."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_LOADED"


NOT_LOADED = NotLoaded()


def to_stringified_map(fixture: Any) -> Any:
    """
    Return the fixture with all keys and leaf values rendered as strings.

    - None becomes ""
    - True/False become "true"/"false"
    - datetimes, dates and times use ISO 8601
    - enums use their value
    - mappings, lists, pydantic models and dataclasses are converted recursively
    - unloaded associations become "association"

    Args:
        fixture: Expected value (model, dataclass, mapping, list or scalar)

    Returns:
        Structure of the same shape containing only strings
    """
    if isinstance(fixture, BaseModel):
        return _stringify_mapping(
            {name: getattr(fixture, name) for name in type(fixture).model_fields}
        )

    if dataclasses.is_dataclass(fixture) and not isinstance(fixture, type):
        return _stringify_mapping(
            {item.name: getattr(fixture, item.name) for item in dataclasses.fields(fixture)}
        )

    if isinstance(fixture, Mapping):
        return _stringify_mapping(fixture)

    if isinstance(fixture, (list, tuple)):
        return [to_stringified_map(item) for item in fixture]

    if _is_plain_object(fixture):
        return _stringify_mapping(vars(fixture))

    return stringify_value(fixture)


def stringify_value(value: Any) -> str:
    """Render a single leaf value the way it appears in a serialized response."""
    if value is None:
        return ""
    if isinstance(value, NotLoaded):
        return ASSOCIATION_PLACEHOLDER
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _stringify_mapping(mapping: Mapping) -> dict:
    return {
        str(key): to_stringified_map(value)
        for key, value in mapping.items()
        if not str(key).startswith("_")
    }


def _is_plain_object(value: Any) -> bool:
    """True for instances of user classes that keep their state in __dict__."""
    if isinstance(value, (str, bytes, int, float, Enum, date, time, NotLoaded)):
        return False
    return hasattr(value, "__dict__") and not isinstance(value, type)
