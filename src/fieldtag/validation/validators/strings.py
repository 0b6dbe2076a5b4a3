"""String validators: ``oneof``, ``isnumber`` and ``isinteger``."""

from __future__ import annotations

import json
import re
from typing import Any

from fieldtag.errors import RuleBuildError, ValidationError
from fieldtag.helpers import type_name
from fieldtag.validation.validator import Validator, new_validator

_INTEGER = re.compile(r"[+-]?[0-9]+")


def one_of(*values: str, name: str = "oneof") -> Validator:
    """The string must equal one of *values*.

    Examples:
        >>> str(one_of("a", "b"))
        'oneof("a","b")'
    """
    if not values:
        raise RuleBuildError(f"{name}: the values must not be empty")

    allowed = frozenset(values)
    listing = "[" + " ".join(values) + "]"
    desc = f"{name}({json.dumps(list(values), separators=(',', ':'))[1:-1]})"

    def validate(_ctx: Any, value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationError(f"expect a string, but got {type_name(value)}")
        if value not in allowed:
            raise ValidationError(f"the string '{value}' is not one of {listing}")

    return new_validator(desc, validate)


def _expect_string(value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"expect a string, but got {type_name(value)}")
    return value


def is_number() -> Validator:
    """The string must parse as an integer or a float."""

    def validate(_ctx: Any, value: Any) -> None:
        text = _expect_string(value)
        # float() also accepts surrounding blanks and digit separators.
        if not text or text != text.strip() or "_" in text:
            raise ValidationError("the string is not a number")
        try:
            float(text)
        except ValueError as exc:
            raise ValidationError("the string is not a number") from exc

    return new_validator("isnumber", validate)


def is_integer() -> Validator:
    """The string must be a decimal integer with an optional sign."""

    def validate(_ctx: Any, value: Any) -> None:
        if not _INTEGER.fullmatch(_expect_string(value)):
            raise ValidationError("the string is not an integer")

    return new_validator("isinteger", validate)
