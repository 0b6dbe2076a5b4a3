"""Exception hierarchy for fieldtag.

Two disjoint families:

- :class:`FieldTagError`: fatal, structural errors. A malformed tag, an
  undefined rule identifier, an arity mismatch, an unsettable field. They
  signal a defect in annotations or registration and always propagate to
  the caller.
- :class:`ValidationError`: the data under inspection failed a rule.
  The struct validation driver collects these per field into
  :class:`NamedErrors`; evaluation of sibling fields continues.
"""

from __future__ import annotations

from collections.abc import Iterator


class FieldTagError(Exception):
    """Base class for fatal errors raised by the engine."""


class TagSyntaxError(FieldTagError):
    """A quoted tag value could not be unquoted."""


class HandlerError(FieldTagError):
    """A tag handler was misused (unsupported type, missing protocol, ...)."""


class HandlerParseError(HandlerError):
    """``Handler.parse`` rejected the raw tag value."""

    def __init__(self, name: str, value: str, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"invalid tag '{name}' value '{value}': {reason}")


class FieldNotSettableError(HandlerError):
    """The field owner refused the assignment (frozen model, read-only slot)."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"the field '{field_name}' cannot be set")


class AnnotationError(FieldTagError):
    """A field annotation that may carry a tag cannot be resolved."""

    def __init__(self, owner: type, field_name: str, annotation: str) -> None:
        self.owner = owner
        self.field_name = field_name
        self.annotation = annotation
        super().__init__(
            f"cannot resolve the annotation {annotation!r} of the field "
            f"'{owner.__name__}.{field_name}'"
        )


class FieldPathError(FieldTagError):
    """A dotted field path does not resolve against the root structure."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        super().__init__(reason or f"not found the struct field '{path}'")


class NotAStructError(FieldTagError, TypeError):
    """The value handed to a struct entry point is not a structure."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"the value {type(value).__name__} is not a struct")


class ComparisonError(FieldTagError):
    """Two values compared by a cross-field rule have inconsistent types."""


class RuleBuildError(FieldTagError):
    """A rule string could not be compiled into a validator."""


class ValidationError(ValueError):
    """A value does not satisfy a validation rule."""


class FieldValidationError(ValidationError):
    """A validation failure attributed to a single named field."""

    def __init__(self, field: str, error: BaseException) -> None:
        self.field = field
        self.error = error
        super().__init__(f"{field}: {error}")


class NamedErrors(ValidationError):
    """A set of validation errors keyed by dotted field path.

    Adding an error under an existing path replaces the previous one.
    The message joins every entry as ``path: message`` separated by
    ``"; "`` in insertion order.
    """

    def __init__(self, errors: dict[str, BaseException] | None = None) -> None:
        super().__init__()
        self._errors: dict[str, BaseException] = dict(errors or {})

    def add(self, name: str, error: BaseException) -> None:
        """Record *error* under *name*, overwriting any earlier entry."""
        self._errors[name] = error

    def items(self) -> list[tuple[str, BaseException]]:
        return list(self._errors.items())

    def to_dict(self) -> dict[str, str]:
        """Return a JSON-serialisable ``{path: message}`` mapping."""
        return {name: str(err) for name, err in self._errors.items()}

    def __getitem__(self, name: str) -> BaseException:
        return self._errors[name]

    def __contains__(self, name: object) -> bool:
        return name in self._errors

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __str__(self) -> str:
        return "; ".join(f"{name}: {err}" for name, err in self._errors.items())

    def __repr__(self) -> str:
        return f"NamedErrors({self.to_dict()!r})"
