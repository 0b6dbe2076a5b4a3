"""Default symbols and rule functions.

Symbols::

    timelayout      %H:%M:%S
    datelayout      %Y-%m-%d
    datetimelayout  %Y-%m-%d %H:%M:%S

Functions (``name`` and ``name()`` are equivalent when there are no
arguments)::

    zero  required  isnumber  isinteger  ip  mac  cidr  addr  duration
    structure  timeformat  dateformat  datetimeformat
    min(float)  max(float)  ranger(float, float)  exp(int, int, int)
    time(layout)  oneof(str, ...)
    array(rule, ...)  mapk(rule, ...)  mapv(rule, ...)  mapkv(rule, ...)
    ltf(path)  lef(path)  gtf(path)  gef(path)
"""

from __future__ import annotations

from typing import Any

from fieldtag.errors import ValidationError
from fieldtag.helpers import type_name
from fieldtag.structs.fields import is_struct
from fieldtag.validation import validator as combinators
from fieldtag.validation import validators as v
from fieldtag.validation.builder import Builder
from fieldtag.validation.functions import (
    function_with_one_float,
    function_with_one_string,
    function_with_strings,
    function_with_three_ints,
    function_with_two_floats,
    function_with_validators,
    function_without_args,
)

TIME_LAYOUT = "%H:%M:%S"
DATE_LAYOUT = "%Y-%m-%d"
DATETIME_LAYOUT = "%Y-%m-%d %H:%M:%S"


def register_defaults(builder: Builder) -> None:
    """Register the default symbols and functions into *builder*."""
    builder.register_symbols(
        {
            "timelayout": TIME_LAYOUT,
            "datelayout": DATE_LAYOUT,
            "datetimelayout": DATETIME_LAYOUT,
        }
    )
    for name, layout in (
        ("timeformat", TIME_LAYOUT),
        ("dateformat", DATE_LAYOUT),
        ("datetimeformat", DATETIME_LAYOUT),
    ):
        builder.register_function(
            function_without_args(name, lambda layout=layout: v.time_layout(layout))
        )

    builder.register_function(function_without_args("zero", v.zero))
    builder.register_function(function_without_args("required", v.required))
    builder.register_function(function_without_args("isnumber", v.is_number))
    builder.register_function(function_without_args("isinteger", v.is_integer))

    builder.register_function(function_without_args("ip", v.ip))
    builder.register_function(function_without_args("mac", v.mac))
    builder.register_function(function_without_args("cidr", v.cidr))
    builder.register_function(function_without_args("addr", v.addr))

    builder.register_function(function_with_one_float("min", v.min_))
    builder.register_function(function_with_one_float("max", v.max_))
    builder.register_function(function_with_two_floats("ranger", v.ranger))
    builder.register_function(function_with_three_ints("exp", v.exp))

    builder.register_function(function_with_one_string("time", v.time_layout))
    builder.register_function(function_without_args("duration", v.duration))

    builder.register_function(function_with_strings("oneof", v.one_of))
    builder.register_function(function_with_validators("array", combinators.array))
    builder.register_function(function_with_validators("mapk", combinators.mapk))
    builder.register_function(function_with_validators("mapv", combinators.mapv))
    builder.register_function(function_with_validators("mapkv", combinators.mapkv))

    def structure(_ctx: Any, value: Any) -> None:
        if value is None:
            return
        if not is_struct(value):
            raise ValidationError(f"expect a struct, but got {type_name(value)}")
        builder.validate_struct(value)

    builder.register_validator_func("structure", structure)
    builder.register_function(function_with_one_string("ltf", v.field_less))
    builder.register_function(function_with_one_string("lef", v.field_less_equal))
    builder.register_function(function_with_one_string("gtf", v.field_greater))
    builder.register_function(function_with_one_string("gef", v.field_greater_equal))
