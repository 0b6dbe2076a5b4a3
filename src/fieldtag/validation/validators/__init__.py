"""Primitive validators behind the default rule functions."""

from fieldtag.validation.validators.net import addr, cidr, ip, mac
from fieldtag.validation.validators.ranges import exp, max_, min_, ranger
from fieldtag.validation.validators.strings import is_integer, is_number, one_of
from fieldtag.validation.validators.structfield import (
    field_greater,
    field_greater_equal,
    field_less,
    field_less_equal,
)
from fieldtag.validation.validators.times import duration, time_layout
from fieldtag.validation.validators.zero import required, zero

__all__ = [
    "addr",
    "cidr",
    "duration",
    "exp",
    "field_greater",
    "field_greater_equal",
    "field_less",
    "field_less_equal",
    "ip",
    "is_integer",
    "is_number",
    "mac",
    "max_",
    "min_",
    "one_of",
    "ranger",
    "required",
    "time_layout",
    "zero",
]
