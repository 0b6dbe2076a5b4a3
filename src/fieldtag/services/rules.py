"""RuleService: check values against rules and inspect annotations.

Engine failures become failed results:

* a literal that cannot be converted: ``invalid_value``;
* a rule that does not compile, or needs a struct context: ``invalid_rule``;
* a value the rule rejects: ``validation_failed``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fieldtag.errors import FieldTagError, TagSyntaxError, ValidationError
from fieldtag.services.result import ErrorCode, ServiceResult
from fieldtag.structs.reflector import Reflector, is_stop_value
from fieldtag.structs.tags import parse_tags, unquote
from fieldtag.validation.builder import Builder

logger = logging.getLogger(__name__)

VALUE_TYPES = ("str", "int", "float", "json")


def convert_value(raw: str, value_type: str) -> Any:
    """Convert the command-line literal *raw* to *value_type*.

    Raises:
        ValueError: *raw* is not a valid literal of *value_type*.
    """
    if value_type == "str":
        return raw
    if value_type == "int":
        return int(raw)
    if value_type == "float":
        return float(raw)
    if value_type == "json":
        return json.loads(raw)
    raise ValueError(f"unknown value type '{value_type}'")


class RuleService:
    """Rule operations against a configured :class:`Builder`.

    *reflector* is only needed by :meth:`handlers`.
    """

    def __init__(self, builder: Builder, reflector: Reflector | None = None) -> None:
        self._builder = builder
        self._reflector = reflector

    def check(self, rule: str, raw: str, *, value_type: str = "str") -> ServiceResult:
        """Validate the literal *raw* against *rule*."""
        op = "check"
        try:
            value = convert_value(raw, value_type)
        except ValueError as exc:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_VALUE,
                f"cannot convert '{raw}' to {value_type}: {exc}",
                value=raw,
            )

        try:
            validator = self._builder.build_validator(rule)
            validator.validate(None, value)
        except ValidationError as exc:
            logger.debug("Rule %s rejected %r: %s", rule, value, exc)
            return ServiceResult.failure(
                op, ErrorCode.VALIDATION_FAILED, str(exc), rule=str(validator), value=value
            )
        except FieldTagError as exc:
            return ServiceResult.failure(op, ErrorCode.INVALID_RULE, str(exc), rule=rule)

        return ServiceResult.success(op, {"rule": str(validator), "value": value})

    def tags(self, tag: str) -> ServiceResult:
        """Parse the annotation string *tag* into its name/value pairs."""
        stop_tag = self._builder.stop_tag
        pairs: list[dict[str, Any]] = []
        warnings: list[str] = []
        for name, quoted in parse_tags(tag):
            try:
                value = unquote(quoted)
            except TagSyntaxError as exc:
                warnings.append(f"{name}: {exc}")
                value = quoted
            stop = name == stop_tag and is_stop_value(quoted)
            pairs.append({"name": name, "value": value, "stop": stop})
        return ServiceResult.success("tags", {"tags": pairs}, warnings=warnings)

    def functions(self) -> ServiceResult:
        """List the rule functions and symbols known to the builder."""
        symbols = self._builder.symbols
        return ServiceResult.success(
            "functions",
            {
                "functions": sorted(self._builder.functions),
                "symbols": {name: symbols[name] for name in sorted(symbols)},
            },
        )

    def handlers(self) -> ServiceResult:
        """List the annotation names the reflector dispatches.

        Raises:
            RuntimeError: the service was created without a reflector.
        """
        if self._reflector is None:
            raise RuntimeError("RuleService.handlers() needs a reflector")
        return ServiceResult.success(
            "handlers",
            {
                "handlers": sorted(self._reflector.handlers),
                "stop_tag": self._reflector.stop_tag,
            },
        )
