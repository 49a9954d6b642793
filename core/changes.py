"""
Change diffs and extraction of their validation messages.

A change diff records a proposed set of field changes along with a validity
flag and per-field error detail. Any object implementing `ChangeDiff` can be
returned by a resolver; the payload builder only relies on the protocol.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from pydantic import ValidationError

from core.constants import UNKNOWN_CODE
from core.messages import ValidationMessage, ValidationOption, render_template


@dataclass(frozen=True)
class FieldError:
    """One error attached to a field of a change diff."""

    field: Optional[str]
    template: str
    code: Optional[str] = None
    options: Tuple[Tuple[str, Any], ...] = ()
    value: Any = None


@runtime_checkable
class ChangeDiff(Protocol):
    """Capability expected from change diffs returned by resolvers."""

    def is_valid(self) -> bool:
        ...

    def changes(self) -> Sequence[FieldError]:
        ...


_MISSING = object()


@dataclass
class ChangeSet:
    """
    Minimal in-memory change diff.

    Attributes:
        changes_applied: Proposed field values keyed by field name
        errors: Field errors collected while validating the changes
    """

    changes_applied: Dict[str, Any] = field(default_factory=dict)
    errors: List[FieldError] = field(default_factory=list)

    def add_error(
        self,
        field_name: str,
        template: str,
        code: Optional[str] = None,
        value: Any = _MISSING,
        **options: Any,
    ) -> "ChangeSet":
        """
        Record an error for a field.

        The offending value defaults to the proposed change for that field.
        `code` falls back to a `validation` option, mirroring how validators
        tag their errors.
        """
        if value is _MISSING:
            value = self.changes_applied.get(field_name)
        self.errors.append(
            FieldError(
                field=field_name,
                template=template,
                code=code or options.get("validation"),
                options=tuple(options.items()),
                value=value,
            )
        )
        return self

    def is_valid(self) -> bool:
        return not self.errors

    def changes(self) -> Sequence[FieldError]:
        return list(self.errors)


class ValidationErrorDiff:
    """Present a pydantic ValidationError as an invalid change diff."""

    def __init__(self, exc: ValidationError):
        self.exc = exc

    def is_valid(self) -> bool:
        return False

    def changes(self) -> Sequence[FieldError]:
        errors = []
        for detail in self.exc.errors():
            location = ".".join(str(part) for part in detail.get("loc", ()))
            context = detail.get("ctx") or {}
            errors.append(
                FieldError(
                    field=location or None,
                    template=detail.get("msg", ""),
                    code=detail.get("type"),
                    options=tuple((key, _plain(value)) for key, value in context.items()),
                    value=_plain(detail.get("input")),
                )
            )
        return errors


def as_change_diff(value: Any) -> Optional[ChangeDiff]:
    """Return a ChangeDiff view of the value, or None if it is not a diff."""
    if isinstance(value, ValidationError):
        return ValidationErrorDiff(value)
    if isinstance(value, ChangeDiff):
        return value
    return None


def extract_messages(diff: ChangeDiff) -> List[ValidationMessage]:
    """
    Convert the errors of an invalid change diff into validation messages.

    Messages keep the diff's order and its native field casing. A valid diff
    yields no messages.

    Args:
        diff: Object implementing the ChangeDiff protocol

    Returns:
        One ValidationMessage per field error
    """
    if diff.is_valid():
        return []

    return [_message_from_error(error) for error in diff.changes()]


def _message_from_error(error: FieldError) -> ValidationMessage:
    options = [ValidationOption(key=str(key), value=value) for key, value in error.options]
    return ValidationMessage(
        code=error.code or UNKNOWN_CODE,
        key=error.field,
        field=error.field,
        template=error.template,
        message=render_template(error.template, options),
        options=options,
        value=error.value,
    )


def _plain(value: Any) -> Any:
    """Keep wire-safe scalars, render anything else (e.g. exceptions in ctx) as text."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
