"""The ``validate`` tag handler.

``parse`` compiles the rule through a :class:`~fieldtag.validation.builder.Builder`
so a malformed rule fails the first time its field is seen. ``run``
evaluates the compiled validator with the root structure as context and
stops the walk at the first invalid field by raising
:class:`~fieldtag.errors.FieldValidationError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fieldtag.errors import FieldValidationError, ValidationError
from fieldtag.structs.fields import FieldRef, is_struct
from fieldtag.structs.handler import Handler

if TYPE_CHECKING:
    from fieldtag.validation.builder import Builder
    from fieldtag.validation.validator import Validator


class ValidatorHandler(Handler):
    """Handler for rule annotations; structure values are left to the walker."""

    def __init__(self, builder: Builder) -> None:
        self.builder = builder

    def parse(self, value: str) -> Validator | None:
        rule = value.strip()
        return self.builder.build_validator(rule) if rule else None

    def run(self, ctx: Any, root: Any, field: FieldRef, arg: Validator | None) -> None:
        value = field.value
        if arg is None or is_struct(value):
            return
        try:
            arg.validate(root, value)
        except ValidationError as exc:
            self.fail(ctx, field, exc)

    def fail(self, ctx: Any, field: FieldRef, error: ValidationError) -> None:
        raise FieldValidationError(field.path, error) from error
