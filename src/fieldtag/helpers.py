"""Small value helpers shared by handlers and validators."""

from __future__ import annotations

from collections.abc import Mapping, Sized
from datetime import datetime
from numbers import Number

from fieldtag.structs.fields import is_struct, struct_fields


def now() -> datetime:
    """Current local time, timezone-aware. Patched in tests."""
    return datetime.now().astimezone()


def is_zero(value: object) -> bool:
    """Report whether *value* is the zero value of its kind.

    ``None``, ``False``, numeric zero and empty sized values are zero.
    Objects exposing ``is_zero()`` decide for themselves; a structure is
    zero when all of its fields are.

    Examples:
        >>> is_zero(0), is_zero(""), is_zero([]), is_zero("a")
        (True, True, True, False)
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, Number):
        return value == 0
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return len(value) == 0

    method = getattr(value, "is_zero", None)
    if callable(method):
        return bool(method())

    if is_struct(value):
        return all(is_zero(getattr(value, info.name)) for info in struct_fields(type(value)))
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def format_number(value: float) -> str:
    """Render a rule bound without a redundant fractional part.

    Examples:
        >>> format_number(3.0), format_number(2.5), format_number(-1)
        ('3', '2.5', '-1')
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def type_name(value: object) -> str:
    """Name of *value*'s type as shown in error messages."""
    return "None" if value is None else type(value).__name__
