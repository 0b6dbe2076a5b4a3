"""Rule-based validation.

Module-level functions operate on :data:`DEFAULT_BUILDER`, which comes
pre-loaded with the default symbols and functions (see
:mod:`fieldtag.validation.defaults`)::

    from fieldtag import validation

    validation.validate("ab", "zero || (min == 3 && max == 10)")
    validation.validate_struct(request)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from fieldtag.validation.builder import Builder, Collector, StructValidator, ValueValidator
from fieldtag.validation.context import Context, ContextBuilder
from fieldtag.validation.defaults import register_defaults
from fieldtag.validation.functions import (
    Function,
    function_with_floats,
    function_with_one_float,
    function_with_one_string,
    function_with_strings,
    function_with_three_ints,
    function_with_two_floats,
    function_with_validators,
    function_without_args,
    new_function,
    validator_function,
)
from fieldtag.validation.handler import ValidatorHandler
from fieldtag.validation.parser import RuleParser
from fieldtag.validation.validator import (
    KV,
    Validator,
    ValidatorFunc,
    and_,
    array,
    bool_validator_func,
    mapk,
    mapkv,
    mapv,
    new_validator,
    or_,
    string_bool_validator_func,
)

DEFAULT_BUILDER = Builder()
register_defaults(DEFAULT_BUILDER)


def register_symbol(name: str, value: Any) -> None:
    DEFAULT_BUILDER.register_symbol(name, value)


def register_symbols(symbols: Mapping[str, Any]) -> None:
    DEFAULT_BUILDER.register_symbols(symbols)


def register_symbol_names(*names: str) -> None:
    DEFAULT_BUILDER.register_symbol_names(*names)


def register_function(function: Function) -> None:
    DEFAULT_BUILDER.register_function(function)


def register_validator_func(name: str, func: ValidatorFunc) -> None:
    DEFAULT_BUILDER.register_validator_func(name, func)


def register_validator_func_bool(name: str, predicate: Callable[[Any], bool], message: str) -> None:
    DEFAULT_BUILDER.register_validator_func_bool(name, predicate, message)


def register_validator_func_bool_string(
    name: str, predicate: Callable[[str], bool], message: str
) -> None:
    DEFAULT_BUILDER.register_validator_func_bool_string(name, predicate, message)


def register_validator_oneof(name: str, *values: str) -> None:
    DEFAULT_BUILDER.register_validator_oneof(name, *values)


def build(ctx: Context, rule: str) -> None:
    DEFAULT_BUILDER.build(ctx, rule)


def build_validator(rule: str) -> Validator:
    return DEFAULT_BUILDER.build_validator(rule)


def validate(value: Any, rule: str, ctx: Any = None) -> None:
    DEFAULT_BUILDER.validate(value, rule, ctx)


def validate_struct(value: Any) -> None:
    DEFAULT_BUILDER.validate_struct(value)


__all__ = [
    "DEFAULT_BUILDER",
    "KV",
    "Builder",
    "Collector",
    "Context",
    "ContextBuilder",
    "Function",
    "RuleParser",
    "StructValidator",
    "Validator",
    "ValidatorFunc",
    "ValidatorHandler",
    "ValueValidator",
    "and_",
    "array",
    "bool_validator_func",
    "build",
    "build_validator",
    "function_with_floats",
    "function_with_one_float",
    "function_with_one_string",
    "function_with_strings",
    "function_with_three_ints",
    "function_with_two_floats",
    "function_with_validators",
    "function_without_args",
    "mapk",
    "mapkv",
    "mapv",
    "new_function",
    "new_validator",
    "or_",
    "register_defaults",
    "register_function",
    "register_symbol",
    "register_symbol_names",
    "register_symbols",
    "register_validator_func",
    "register_validator_func_bool",
    "register_validator_func_bool_string",
    "register_validator_oneof",
    "string_bool_validator_func",
    "validate",
    "validate_struct",
    "validator_function",
]
