"""
Pydantic models for validation messages returned in mutation payloads.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.constants import TEMPLATE_PLACEHOLDER_PATTERN, UNKNOWN_CODE


class ValidationOption(BaseModel):
    """Single key/value pair used to render a message template."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Name of the template variable")
    value: Any = Field(None, description="Value substituted for the variable")


class ValidationMessage(BaseModel):
    """
    Structured description of one failed validation.

    Field-scoped errors carry the offending field in `key` (and its legacy
    twin `field`). General errors leave both empty.
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Failure kind, e.g. 'required' or 'too_short'")
    key: Optional[str] = Field(None, description="Offending input field, if field-scoped")
    field: Optional[str] = Field(None, description="Deprecated alias of key, left in producer casing")
    template: Optional[str] = Field(None, description="Message template with %{name} placeholders")
    message: Optional[str] = Field(None, description="Rendered human-readable message")
    options: List[ValidationOption] = Field(default_factory=list, description="Template variables")
    value: Any = Field(None, description="Offending value, when known")

    @field_validator("options", mode="before")
    @classmethod
    def _coerce_options(cls, value):
        """Accept mappings and (key, value) pairs in addition to option models."""
        if value is None:
            return []
        if isinstance(value, Mapping):
            return [{"key": str(k), "value": v} for k, v in value.items()]
        if not isinstance(value, (list, tuple)):
            return value

        options = []
        for item in value:
            if isinstance(item, (tuple, list)) and len(item) == 2:
                options.append({"key": str(item[0]), "value": item[1]})
            else:
                options.append(item)
        return options

    @model_validator(mode="after")
    def _fill_text(self) -> "ValidationMessage":
        if self.template is None and self.message is None:
            raise ValueError("a validation message needs a template or a message")
        # Model is frozen; fill the missing half directly.
        if self.message is None:
            object.__setattr__(self, "message", render_template(self.template, self.options))
        elif self.template is None:
            object.__setattr__(self, "template", self.message)
        return self

    @classmethod
    def generic(cls, text: str) -> "ValidationMessage":
        """Build the message used for errors reported as plain text."""
        return cls(code=UNKNOWN_CODE, key=None, template=text, message=text, options=[])

    def option_map(self) -> dict[str, Any]:
        """Return options as a dict, later keys winning."""
        return {option.key: option.value for option in self.options}


def render_template(template: str, options: List[ValidationOption]) -> str:
    """
    Interpolate %{name} placeholders from message options.

    Unknown placeholders are left untouched.

    Args:
        template: Message template, e.g. "should be at least %{count} character(s)"
        options: Template variables

    Returns:
        Rendered message text
    """
    values = {option.key: option.value for option in options}

    def _substitute(match):
        name = match.group(1)
        if name not in values:
            return match.group(0)
        return str(values[name])

    return TEMPLATE_PLACEHOLDER_PATTERN.sub(_substitute, template)
