"""Cross-field comparisons: ``ltf``, ``lef``, ``gtf`` and ``gef``.

The other field is addressed by a dotted path from the root structure,
which the struct validation driver passes as the validation context::

    @dataclass
    class Window:
        start: int = 0
        end: int = tagged('validate:"gtf(\\"start\\")"', default=0)

Only numbers, ``datetime``/``date``/``time``/``timedelta`` values and
objects with a ``compare(other) -> -1 | 0 | 1`` method are supported;
both sides must have the same type. Anything else is a defect in the
rule and raises :class:`~fieldtag.errors.ComparisonError`.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from fieldtag.errors import ComparisonError, FieldPathError, RuleBuildError, ValidationError
from fieldtag.helpers import type_name
from fieldtag.structs.fields import get_field_by_path
from fieldtag.validation.validator import Validator, new_validator

_ORDERED = (int, float, Decimal, dt.datetime, dt.date, dt.time, dt.timedelta)


def compare(left: Any, right: Any, name: str) -> int:
    """Three-way compare *left* with the field *name* holding *right*."""
    method = getattr(left, "compare", None)
    if callable(method):
        result = method(right)
        if result not in (-1, 0, 1):
            raise ComparisonError(f"compare returns an unknown result {result!r}")
        return result

    if isinstance(left, bool) or not isinstance(left, _ORDERED):
        raise ComparisonError(f"not support the type {type_name(left)}")
    if type(left) is not type(right):
        raise ComparisonError(f"the type is not consistent with the field named '{name}'")
    try:
        return (left > right) - (left < right)
    except TypeError as exc:
        # naive vs aware datetimes
        raise ComparisonError(f"cannot compare with the field named '{name}': {exc}") from exc


def _field_comparator(
    rule: str, path: str, accept: Callable[[int], bool], message: str
) -> Validator:
    if not path:
        raise RuleBuildError(f"{rule}: the field name must not be empty")

    def validate(ctx: Any, value: Any) -> None:
        if ctx is None:
            raise FieldPathError(path, f"no struct context to look up the field named '{path}'")
        found, other = get_field_by_path(ctx, path)
        if not found:
            raise FieldPathError(
                path,
                f"the context is not a struct or does not contain the field named '{path}'",
            )
        if other is None:
            raise ValidationError(f"the field named '{path}' is nil")
        if not accept(compare(value, other, path)):
            raise ValidationError(f"{message} the field named '{path}'")

    return new_validator(f"{rule}({path})", validate)


def field_less(path: str) -> Validator:
    return _field_comparator("ltf", path, lambda c: c < 0, "the value is not less than")


def field_less_equal(path: str) -> Validator:
    return _field_comparator(
        "lef", path, lambda c: c <= 0, "the value is not less than or equal to"
    )


def field_greater(path: str) -> Validator:
    return _field_comparator("gtf", path, lambda c: c > 0, "the value is not greater than")


def field_greater_equal(path: str) -> Validator:
    return _field_comparator(
        "gef", path, lambda c: c >= 0, "the value is not greater than or equal to"
    )
