"""Bound validators: ``min``, ``max``, ``ranger`` and ``exp``.

``min``, ``max`` and ``ranger`` compare the value itself for numbers and
the length for strings and containers, so ``min(3)`` means "at least 3"
for an ``int`` and "at least 3 characters" for a ``str``. For lengths
``min`` and ``max`` truncate a fractional bound: ``min(2.5)`` accepts ``"ab"``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from numbers import Integral, Real
from typing import Any

from fieldtag.errors import RuleBuildError, ValidationError
from fieldtag.helpers import format_number, type_name
from fieldtag.validation.validator import Validator, new_validator

_LENGTHS = frozenset({"the string length", "the length"})


def _measure(value: Any) -> tuple[str, float]:
    """Return the message subject and the magnitude to compare."""
    if value is None:
        raise ValidationError("unexpected empty value")
    if isinstance(value, bool):
        raise ValidationError(f"unsupported type '{type_name(value)}'")
    if isinstance(value, Integral):
        return "the integer", value  # type: ignore[return-value]
    if isinstance(value, Real):
        return "the float", float(value)
    if isinstance(value, str):
        return "the string length", len(value)
    if isinstance(value, (Sequence, Mapping, Set)):
        return "the length", len(value)
    raise ValidationError(f"unsupported type '{type_name(value)}'")


def _limit(subject: str, bound: float) -> float:
    """Lengths are compared with the bound truncated to an integer."""
    return int(bound) if subject in _LENGTHS else bound


def min_(bound: float) -> Validator:
    """Value (or length) must not be less than *bound*."""
    text = format_number(bound)

    def validate(_ctx: Any, value: Any) -> None:
        subject, magnitude = _measure(value)
        if magnitude < _limit(subject, bound):
            raise ValidationError(f"{subject} is less than {text}")

    return new_validator(f"min({text})", validate)


def max_(bound: float) -> Validator:
    """Value (or length) must not be greater than *bound*."""
    text = format_number(bound)

    def validate(_ctx: Any, value: Any) -> None:
        subject, magnitude = _measure(value)
        if magnitude > _limit(subject, bound):
            raise ValidationError(f"{subject} is greater than {text}")

    return new_validator(f"max({text})", validate)


def ranger(smallest: float, biggest: float) -> Validator:
    """Value (or length) must lie in ``[smallest, biggest]``."""
    left, right = format_number(smallest), format_number(biggest)

    def validate(_ctx: Any, value: Any) -> None:
        subject, magnitude = _measure(value)
        if not smallest <= magnitude <= biggest:
            raise ValidationError(f"{subject} is not in range [{left}, {right}]")

    return new_validator(f"ranger({left}, {right})", validate)


def exp(base: int, start: int, end: int) -> Validator:
    """Integer must be one of ``base**start .. base**end``.

    Raises:
        RuleBuildError: *base* is outside 2..36, *start* is negative, or
            *end* is not greater than *start*.
    """
    if base < 2:
        raise RuleBuildError("the exp base must not be less than 2")
    if base > 36:
        raise RuleBuildError("the exp base must not be greater than 36")
    if start < 0:
        raise RuleBuildError("the exp start must not be less than 0")
    if end <= start:
        raise RuleBuildError("the exp end must be greater than start")

    values = tuple(base**i for i in range(start, end + 1))
    message = "the integer is not in range [" + ", ".join(str(v) for v in values) + "]"

    def validate(_ctx: Any, value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise ValidationError(f"unsupported type '{type_name(value)}'")
        if value not in values:
            raise ValidationError(message)

    return new_validator(f"exp({base},{start},{end})", validate)
