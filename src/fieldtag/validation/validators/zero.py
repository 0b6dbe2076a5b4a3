"""``zero`` and ``required``."""

from __future__ import annotations

from typing import Any

from fieldtag.errors import ValidationError
from fieldtag.helpers import is_zero
from fieldtag.validation.validator import Validator, new_validator


def zero() -> Validator:
    """The value must be the zero value of its type."""

    def validate(_ctx: Any, value: Any) -> None:
        if not is_zero(value):
            raise ValidationError("the value should be empty")

    return new_validator("zero", validate)


def required() -> Validator:
    """The value must not be the zero value of its type."""

    def validate(_ctx: Any, value: Any) -> None:
        if is_zero(value):
            raise ValidationError("the value cannot be empty")

    return new_validator("required", validate)
