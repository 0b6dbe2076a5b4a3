"""Builder context: accumulates validators while a rule is compiled.

The rule parser drives a context through :meth:`Context.new`,
:meth:`Context.and_` and :meth:`Context.or_`, mirroring the shape of the
boolean expression; functions append the validators they build.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from fieldtag.errors import RuleBuildError
from fieldtag.validation.validator import Validator, and_, or_


@runtime_checkable
class ContextBuilder(Protocol):
    """A sub-expression that can build itself into a context.

    Passed as an argument to functions that take validators, such as
    ``array(min(1), max(3))``.
    """

    def build(self, ctx: Context) -> None: ...


class Context:
    """Mutable list of validators for one level of a rule expression."""

    def __init__(self) -> None:
        self._validators: list[Validator] = []

    def new(self) -> Context:
        return Context()

    def and_(self, ctx: Context) -> None:
        """Append the validators of *ctx* combined with AND."""
        if ctx.validators:
            self.append_validators(and_(*ctx.validators))

    def or_(self, ctx: Context) -> None:
        """Append the validators of *ctx* combined with OR."""
        if ctx.validators:
            self.append_validators(or_(*ctx.validators))

    def not_(self, ctx: Context) -> None:
        raise RuleBuildError("the NOT validation rule is not supported")

    def append_validators(self, *validators: Validator) -> None:
        self._validators.extend(validators)

    @property
    def validators(self) -> list[Validator]:
        return list(self._validators)

    def validator(self) -> Validator:
        """All accumulated validators combined with AND.

        Raises:
            RuleBuildError: nothing was built into the context.
        """
        if not self._validators:
            raise RuleBuildError("the rule produced no validators")
        return and_(*self._validators)
