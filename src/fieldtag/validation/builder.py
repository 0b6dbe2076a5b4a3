"""Rule builder: compiles rule strings into cached validators.

The builder owns the function and symbol tables consulted while a rule
is parsed, the rule cache (rule string -> compiled validator) and the
struct validation driver.

Like handler registration, registering functions and symbols is an
initialisation-time operation: finish it before validating from several
threads. Building and validating are thread-safe.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from fieldtag.cache import SnapshotCache
from fieldtag.errors import NamedErrors, NotAStructError, RuleBuildError, ValidationError
from fieldtag.helpers import type_name
from fieldtag.structs.fields import DEFAULT_NAME_TAGS, FieldRef, is_struct
from fieldtag.structs.reflector import STOP_TAG, Reflector
from fieldtag.validation.context import Context
from fieldtag.validation.functions import Function, function_without_args, validator_function
from fieldtag.validation.handler import ValidatorHandler
from fieldtag.validation.parser import RuleParser
from fieldtag.validation.validator import (
    Validator,
    ValidatorFunc,
    bool_validator_func,
    new_validator,
    string_bool_validator_func,
)
from fieldtag.validation.validators.strings import one_of

logger = logging.getLogger(__name__)

DEFAULT_TAG = "validate"


@runtime_checkable
class ValueValidator(Protocol):
    """A nested structure that validates itself after its fields pass."""

    def validate_value(self, ctx: Any) -> None: ...


class Builder:
    """Function/symbol tables plus a rule cache.

    Args:
        tag: Annotation name holding validation rules.
        stop_tag: Annotation name that stops descent into a field.
        name_tags: Annotation names consulted for field display names.
        parser: Rule parser; replaceable for instrumentation.
    """

    def __init__(
        self,
        *,
        tag: str = DEFAULT_TAG,
        stop_tag: str = STOP_TAG,
        name_tags: tuple[str, ...] | list[str] = DEFAULT_NAME_TAGS,
        parser: RuleParser | None = None,
    ) -> None:
        self.symbols: dict[str, Any] = {}
        self.parser = parser or RuleParser()
        self._functions: dict[str, Function] = {}
        self._rules: SnapshotCache[str, Validator] = SnapshotCache()
        self._structs = StructValidator(self, tag=tag, stop_tag=stop_tag, name_tags=name_tags)

    @property
    def tag(self) -> str:
        return self._structs.tag

    @property
    def stop_tag(self) -> str:
        return self._structs.stop_tag

    # ------------------------------------------------------------------
    # Symbols
    # ------------------------------------------------------------------

    def register_symbol(self, name: str, value: Any) -> None:
        if not name:
            raise ValueError("the symbol name must not be empty")
        if value is None:
            raise ValueError("the symbol value must not be None")
        self.symbols[name] = value

    def register_symbols(self, symbols: Mapping[str, Any]) -> None:
        for name, value in symbols.items():
            self.register_symbol(name, value)

    def register_symbol_names(self, *names: str) -> None:
        """Register symbols whose value is their own name."""
        for name in names:
            self.register_symbol(name, name)

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def register_function(self, function: Function) -> None:
        """Register *function* under its name, replacing any previous one."""
        if function.name in self._functions:
            logger.debug("Replacing rule function: %s", function.name)
        self._functions[function.name] = function

    def register_validator_func(self, name: str, func: ValidatorFunc) -> None:
        """Register ``func(ctx, value)`` as the argument-less function *name*."""
        validator = new_validator(name, func)
        self.register_function(function_without_args(name, lambda: validator))

    def register_validator_func_bool(
        self, name: str, predicate: Callable[[Any], bool], message: str
    ) -> None:
        self.register_validator_func(name, bool_validator_func(predicate, message))

    def register_validator_func_bool_string(
        self, name: str, predicate: Callable[[str], bool], message: str
    ) -> None:
        self.register_validator_func(name, string_bool_validator_func(predicate, message))

    def register_validator_oneof(self, name: str, *values: str) -> None:
        """Register *name* as a shorthand for ``oneof(*values)``."""
        self.register_function(validator_function(name, one_of(*values, name=name)))

    def get_function(self, name: str) -> Function | None:
        return self._functions.get(name)

    @property
    def functions(self) -> Mapping[str, Function]:
        return MappingProxyType(self._functions)

    # ------------------------------------------------------------------
    # Parser callbacks
    # ------------------------------------------------------------------

    def get_identifier(self, name: str) -> Any:
        """Resolve *name*: functions first, then symbols."""
        function = self._functions.get(name)
        if function is not None:
            return function
        if name in self.symbols:
            return self.symbols[name]
        raise RuleBuildError(f"{name} is not defined")

    def eq(self, ctx: Context, left: Any, right: Any) -> None:
        """``min == 3`` and ``3 == min`` both mean ``min(3)``."""
        if isinstance(left, Function):
            left.call(ctx, right)
        elif isinstance(right, Function):
            right.call(ctx, left)
        else:
            raise RuleBuildError(
                f"left or right is not a function: {type_name(left)}, {type_name(right)}"
            )

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def build(self, ctx: Context, rule: str) -> None:
        """Parse *rule* and build its validators into *ctx* (uncached)."""
        self.parser.build(self, ctx, rule)

    def build_validator(self, rule: str) -> Validator:
        """Return the validator for *rule*, compiling it on first use.

        Raises:
            RuleBuildError: *rule* is empty or cannot be compiled.
        """
        if not rule:
            raise RuleBuildError("the validation rule must not be empty")
        return self._rules.get_or_create(rule, lambda: self._compile(rule))

    def _compile(self, rule: str) -> Validator:
        ctx = Context()
        self.build(ctx, rule)
        validator = ctx.validator()
        logger.debug("Built validation rule: %s -> %s", rule, validator)
        return validator

    @property
    def cached_rules(self) -> Mapping[str, Validator]:
        return self._rules.snapshot()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, value: Any, rule: str, ctx: Any = None) -> None:
        """Validate *value* against *rule*; an empty rule always passes.

        Raises:
            ValidationError: the value does not satisfy the rule.
            RuleBuildError: the rule cannot be compiled.
        """
        if not rule:
            return
        self.build_validator(rule).validate(ctx, value)

    def validate_struct(self, value: Any) -> None:
        """Validate every annotated field of the structure *value*.

        Raises:
            NamedErrors: one or more fields failed, keyed by dotted path.
            NotAStructError: *value* is not a structure.
        """
        if not is_struct(value):
            raise NotAStructError(value)
        collector = Collector()
        self._structs.reflect(value, collector)
        if collector.errors:
            raise collector.errors


@dataclass
class Collector:
    """Per-call state of a struct validation walk."""

    errors: NamedErrors = dataclasses.field(default_factory=NamedErrors)
    failures: int = 0

    def add(self, path: str, error: BaseException) -> None:
        self.errors.add(path, error)
        self.failures += 1


class _CollectingHandler(ValidatorHandler):
    def fail(self, ctx: Collector, field: FieldRef, error: ValidationError) -> None:
        ctx.add(field.path, error)


class StructValidator(Reflector):
    """Reflector that evaluates only validation rules, collecting failures.

    Structure-valued fields are walked instead of evaluated. Once their
    walk records no failure, a nested value implementing
    :class:`ValueValidator` validates itself and any error is recorded
    under the field's path. Recording under an existing path replaces the
    earlier error.
    """

    def __init__(
        self,
        builder: Builder,
        *,
        tag: str = DEFAULT_TAG,
        stop_tag: str = STOP_TAG,
        name_tags: tuple[str, ...] | list[str] = DEFAULT_NAME_TAGS,
    ) -> None:
        super().__init__(stop_tag=stop_tag, name_tags=name_tags)
        self.tag = tag
        self.register(tag, _CollectingHandler(builder))

    def descend(self, ctx: Collector, root: Any, field: FieldRef) -> None:
        value = field.value
        if not is_struct(value):
            super().descend(ctx, root, field)
            return

        failures = ctx.failures
        self.walk(ctx, root, value, field.path)
        if ctx.failures == failures and isinstance(value, ValueValidator):
            try:
                value.validate_value(root)
            except ValidationError as exc:
                ctx.add(field.path, exc)
