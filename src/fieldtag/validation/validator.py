"""Validator contract and the combinator algebra.

A validator checks ``(ctx, value)`` and raises
:class:`~fieldtag.errors.ValidationError` on failure; returning normally
means the value is valid. ``str(validator)`` renders its rule text.

Combinators:

- :func:`and_`: all must pass, stops at the first failure.
- :func:`or_`: any must pass, stops at the first success and otherwise
  re-raises the last failure.
- :func:`array`, :func:`mapk`, :func:`mapv`, :func:`mapkv`: apply the
  inner validators (combined with :func:`and_`) to every element, key,
  value or key/value pair.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, NamedTuple

from fieldtag.errors import ValidationError
from fieldtag.helpers import type_name

ValidatorFunc = Callable[[Any, Any], None]


class Validator(ABC):
    """Checks a value, raising ValidationError when it is invalid."""

    @abstractmethod
    def validate(self, ctx: Any, value: Any) -> None:
        """Validate *value*; *ctx* is the root structure or None."""

    @abstractmethod
    def __str__(self) -> str: ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


class FuncValidator(Validator):
    """Validator backed by a plain ``(ctx, value)`` function."""

    __slots__ = ("_func", "_rule")

    def __init__(self, rule: str, func: ValidatorFunc) -> None:
        self._rule = rule
        self._func = func

    def validate(self, ctx: Any, value: Any) -> None:
        self._func(ctx, value)

    def __str__(self) -> str:
        return self._rule


def new_validator(rule: str, func: ValidatorFunc) -> Validator:
    """Build a validator from its rule text and a validation function."""
    return FuncValidator(rule, func)


def bool_validator_func(predicate: Callable[[Any], bool], message: str) -> ValidatorFunc:
    """Turn a predicate into a validation function failing with *message*."""
    if predicate is None:
        raise ValueError("bool_validator_func: the predicate must not be None")
    if not message:
        raise ValueError("bool_validator_func: the message must not be empty")

    def validate(_ctx: Any, value: Any) -> None:
        if not predicate(value):
            raise ValidationError(message)

    return validate


def string_bool_validator_func(predicate: Callable[[str], bool], message: str) -> ValidatorFunc:
    """Like :func:`bool_validator_func`, for predicates over strings only."""
    if predicate is None:
        raise ValueError("string_bool_validator_func: the predicate must not be None")
    if not message:
        raise ValueError("string_bool_validator_func: the message must not be empty")

    def validate(_ctx: Any, value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationError(f"unsupported type '{type_name(value)}'")
        if not predicate(value):
            raise ValidationError(message)

    return validate


def _format(sep: str, validators: tuple[Validator, ...]) -> str:
    if len(validators) == 1:
        return str(validators[0])
    return "(" + sep.join(str(v) for v in validators) + ")"


class AndValidator(Validator):
    __slots__ = ("validators",)

    def __init__(self, validators: tuple[Validator, ...]) -> None:
        self.validators = validators

    def validate(self, ctx: Any, value: Any) -> None:
        for validator in self.validators:
            validator.validate(ctx, value)

    def __str__(self) -> str:
        return _format(" && ", self.validators)


class OrValidator(Validator):
    __slots__ = ("validators",)

    def __init__(self, validators: tuple[Validator, ...]) -> None:
        self.validators = validators

    def validate(self, ctx: Any, value: Any) -> None:
        last: ValidationError | None = None
        for validator in self.validators:
            try:
                validator.validate(ctx, value)
            except ValidationError as exc:
                last = exc
            else:
                return
        if last is not None:
            raise last

    def __str__(self) -> str:
        return _format(" || ", self.validators)


def and_(*validators: Validator) -> Validator:
    """Combine *validators* so that all of them must pass.

    A single validator is returned unchanged and nested AND validators
    are flattened.

    Raises:
        ValueError: no validator was given.
    """
    if not validators:
        raise ValueError("and_: no validators")
    if len(validators) == 1:
        return validators[0]

    flat: list[Validator] = []
    for v in validators:
        if isinstance(v, AndValidator):
            flat.extend(v.validators)
        else:
            flat.append(v)
    return AndValidator(tuple(flat))


def or_(*validators: Validator) -> Validator:
    """Combine *validators* so that any one of them must pass.

    Raises:
        ValueError: no validator was given.
    """
    if not validators:
        raise ValueError("or_: no validators")
    if len(validators) == 1:
        return validators[0]

    flat: list[Validator] = []
    for v in validators:
        if isinstance(v, OrValidator):
            flat.extend(v.validators)
        else:
            flat.append(v)
    return OrValidator(tuple(flat))


def _compose(name: str, validators: tuple[Validator, ...]) -> tuple[Validator, str]:
    if not validators:
        raise ValueError(f"{name}: need at least one validator")
    validator = and_(*validators)
    desc = str(validator)
    if desc.startswith("("):
        return validator, name + desc
    return validator, f"{name}({desc})"


def array(*validators: Validator) -> Validator:
    """Validate every element of a list or tuple."""
    inner, desc = _compose("array", validators)

    def validate(ctx: Any, value: Any) -> None:
        if not isinstance(value, (list, tuple)):
            raise ValidationError(
                f"expect the value is a list or tuple, but got {type_name(value)}"
            )
        for index, item in enumerate(value):
            try:
                inner.validate(ctx, item)
            except ValidationError as exc:
                raise ValidationError(f"{index}th element is invalid: {exc}") from exc

    return new_validator(desc, validate)


def _expect_mapping(value: Any) -> Mapping:
    if not isinstance(value, Mapping):
        raise ValidationError(f"expect the value is a map, but got {type_name(value)}")
    return value


def mapk(*validators: Validator) -> Validator:
    """Validate every key of a mapping."""
    inner, desc = _compose("mapk", validators)

    def validate(ctx: Any, value: Any) -> None:
        for key in _expect_mapping(value):
            try:
                inner.validate(ctx, key)
            except ValidationError as exc:
                raise ValidationError(f"map key '{key}' is invalid: {exc}") from exc

    return new_validator(desc, validate)


def mapv(*validators: Validator) -> Validator:
    """Validate every value of a mapping."""
    inner, desc = _compose("mapv", validators)

    def validate(ctx: Any, value: Any) -> None:
        for item in _expect_mapping(value).values():
            try:
                inner.validate(ctx, item)
            except ValidationError as exc:
                raise ValidationError(f"map value '{item}' is invalid: {exc}") from exc

    return new_validator(desc, validate)


class KV(NamedTuple):
    """A key/value pair handed to the validators of :func:`mapkv`."""

    key: Any
    value: Any


def mapkv(*validators: Validator) -> Validator:
    """Validate every key/value pair of a mapping as a :class:`KV`."""
    inner, desc = _compose("mapkv", validators)

    def validate(ctx: Any, value: Any) -> None:
        for key, item in _expect_mapping(value).items():
            try:
                inner.validate(ctx, KV(key, item))
            except ValidationError as exc:
                raise ValidationError(f"map from key '{key}' is invalid: {exc}") from exc

    return new_validator(desc, validate)
