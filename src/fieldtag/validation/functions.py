"""Rule functions: names callable from a rule string.

A :class:`Function` receives the builder context and the literal
arguments of the call, checks arity and argument types, and appends the
validator it builds. The ``function_with_*`` factories cover the common
signatures.

Argument typing: float parameters take int or float literals, int
parameters take ints only, and booleans are never numbers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from fieldtag.errors import RuleBuildError
from fieldtag.helpers import type_name
from fieldtag.validation.context import Context, ContextBuilder
from fieldtag.validation.validator import Validator

CallFunc = Callable[..., None]


class Function(ABC):
    """A named rule function."""

    name: str

    @abstractmethod
    def call(self, ctx: Context, *args: Any) -> None:
        """Build validators for ``name(*args)`` into *ctx*.

        Raises:
            RuleBuildError: wrong number or type of arguments.
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class _CallFunction(Function):
    def __init__(self, name: str, call: CallFunc) -> None:
        self.name = name
        self._call = call

    def call(self, ctx: Context, *args: Any) -> None:
        self._call(ctx, *args)


class ValidatorFunction(Function):
    """A function taking no arguments that appends a fixed validator."""

    def __init__(self, name: str, validator: Validator) -> None:
        self.name = name
        self.validator = validator

    def call(self, ctx: Context, *args: Any) -> None:
        if args:
            raise RuleBuildError(f"{self.name} must not have any arguments")
        ctx.append_validators(self.validator)


def new_function(name: str, call: CallFunc) -> Function:
    """Wrap ``call(ctx, *args)`` as a Function named *name*."""
    if not name:
        raise ValueError("the function name must not be empty")
    return _CallFunction(name, call)


def validator_function(name: str, validator: Validator) -> Function:
    return ValidatorFunction(name, validator)


def _float_arg(name: str, index: int, arg: Any) -> float:
    if isinstance(arg, bool) or not isinstance(arg, (int, float)):
        if index < 0:
            raise RuleBuildError(f"{name} does not support the argument type {type_name(arg)}")
        raise RuleBuildError(
            f"{name} expects {index}th argument is an int or float, but got {type_name(arg)}"
        )
    return float(arg)


def _int_arg(name: str, index: int, arg: Any) -> int:
    if isinstance(arg, bool) or not isinstance(arg, int):
        raise RuleBuildError(f"{name} expects {index}th argument is an int, but got {type_name(arg)}")
    return arg


def _str_arg(name: str, index: int, arg: Any) -> str:
    if not isinstance(arg, str):
        raise RuleBuildError(f"{name} expects {index}th argument is a string, but got {type_name(arg)}")
    return arg


def _arity(name: str, args: tuple[Any, ...], count: int, words: str) -> None:
    if len(args) != count:
        raise RuleBuildError(f"{name} must have and only have {words}")


def function_without_args(name: str, factory: Callable[[], Validator]) -> Function:
    """``name`` or ``name()``."""

    def call(ctx: Context, *args: Any) -> None:
        if args:
            raise RuleBuildError(f"{name} must not have any arguments")
        ctx.append_validators(factory())

    return new_function(name, call)


def function_with_one_float(name: str, factory: Callable[[float], Validator]) -> Function:
    """``name(N)``, also reachable as ``name == N``."""

    def call(ctx: Context, *args: Any) -> None:
        _arity(name, args, 1, "one argument")
        ctx.append_validators(factory(_float_arg(name, -1, args[0])))

    return new_function(name, call)


def function_with_two_floats(name: str, factory: Callable[[float, float], Validator]) -> Function:
    def call(ctx: Context, *args: Any) -> None:
        _arity(name, args, 2, "two arguments")
        ctx.append_validators(factory(_float_arg(name, 0, args[0]), _float_arg(name, 1, args[1])))

    return new_function(name, call)


def function_with_floats(name: str, factory: Callable[..., Validator]) -> Function:
    def call(ctx: Context, *args: Any) -> None:
        ctx.append_validators(factory(*(_float_arg(name, i, a) for i, a in enumerate(args))))

    return new_function(name, call)


def function_with_one_string(name: str, factory: Callable[[str], Validator]) -> Function:
    def call(ctx: Context, *args: Any) -> None:
        _arity(name, args, 1, "one argument")
        ctx.append_validators(factory(_str_arg(name, 0, args[0])))

    return new_function(name, call)


def function_with_strings(name: str, factory: Callable[..., Validator]) -> Function:
    def call(ctx: Context, *args: Any) -> None:
        ctx.append_validators(factory(*(_str_arg(name, i, a) for i, a in enumerate(args))))

    return new_function(name, call)


def function_with_three_ints(name: str, factory: Callable[[int, int, int], Validator]) -> Function:
    def call(ctx: Context, *args: Any) -> None:
        _arity(name, args, 3, "three arguments")
        ctx.append_validators(factory(*(_int_arg(name, i, a) for i, a in enumerate(args))))

    return new_function(name, call)


def function_with_validators(name: str, factory: Callable[..., Validator]) -> Function:
    """``name(rule, ...)``: each argument is a sub-rule built into its own context.

    The sub-rules are handed to *factory* in order; the combinators
    combine them with AND.
    """

    def call(ctx: Context, *args: Any) -> None:
        if not args:
            raise RuleBuildError(f"{name} validator has no arguments")

        ac = ctx.new()
        for index, arg in enumerate(args):
            if not isinstance(arg, ContextBuilder):
                raise RuleBuildError(
                    f"{name} expects {index}th argument is a validator, but got {type_name(arg)}"
                )
            nc = ac.new()
            arg.build(nc)
            ac.and_(nc)

        ctx.append_validators(factory(*ac.validators))

    return new_function(name, call)
