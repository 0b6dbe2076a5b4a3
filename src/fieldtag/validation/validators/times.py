"""Time validators: ``time(layout)`` and ``duration``."""

from __future__ import annotations

import datetime as dt
import json
import re
from typing import Any

from fieldtag.errors import ValidationError
from fieldtag.helpers import type_name
from fieldtag.validation.validator import Validator, new_validator

# Go-style durations: "300ms", "-1.5h", "2h45m", or a bare "0".
_DURATION = re.compile(r"[-+]?(?:0|(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:ns|us|µs|μs|ms|s|m|h))+)")


def time_layout(layout: str) -> Validator:
    """The string must match the :func:`~datetime.datetime.strptime` *layout*.

    ``datetime``, ``date`` and ``time`` objects always pass.
    """

    def validate(_ctx: Any, value: Any) -> None:
        if isinstance(value, (dt.datetime, dt.date, dt.time)):
            return
        if not isinstance(value, str):
            raise ValidationError(f"unsupported type '{type_name(value)}'")
        try:
            dt.datetime.strptime(value, layout)
        except ValueError as exc:
            raise ValidationError(
                f"the time '{value}' does not match the layout '{layout}'"
            ) from exc

    return new_validator(f"time({json.dumps(layout)})", validate)


def duration() -> Validator:
    """A Go-style duration string or a :class:`~datetime.timedelta`.

    Examples:
        >>> duration().validate(None, "1h30m")
        >>> duration().validate(None, dt.timedelta(seconds=3))
    """

    def validate(_ctx: Any, value: Any) -> None:
        if isinstance(value, dt.timedelta):
            return
        if not isinstance(value, str):
            raise ValidationError(f"unsupported type '{type_name(value)}'")
        if not _DURATION.fullmatch(value):
            raise ValidationError(f"invalid duration '{value}'")

    return new_validator("duration", validate)
