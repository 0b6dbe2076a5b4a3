"""Field-mutating handlers: ``set``, ``default`` and ``inject``.

``default`` fills zero-valued fields. Its value is one of:

- ``.Path.To.Field``: copy another field, addressed from the root;
- ``now()`` or ``now(<strftime layout>)``: current time for ``str``,
  ``int`` (unix seconds) and ``datetime`` fields;
- any other string, handed to the field value's ``set()`` method when it
  has one, otherwise coerced to the annotated field type by pydantic
  (containers and models read it as JSON).
"""

from __future__ import annotations

import types
import typing
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from fieldtag import helpers
from fieldtag.errors import FieldPathError, HandlerError
from fieldtag.structs.fields import FieldRef, get_field_by_path
from fieldtag.structs.handler import Handler, Parser, Runner, identity_parser


@runtime_checkable
class Setter(Protocol):
    """A value that knows how to assign itself from a tag argument."""

    def set(self, value: Any) -> None: ...


@runtime_checkable
class Injector(Protocol):
    """A value that accepts an injected dependency named by a tag."""

    def inject(self, arg: Any) -> None: ...


def base_type(annotation: Any) -> Any:
    """Strip ``Optional[...]`` from *annotation*.

    Examples:
        >>> base_type(int | None)
        <class 'int'>
        >>> base_type(typing.Optional[str])
        <class 'str'>
    """
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def fill_none(field: FieldRef, method: str) -> Any:
    """Return the field value, instantiating its annotated class when None.

    The class is only instantiated when it provides *method*.
    """
    value = field.value
    if value is None:
        cls = base_type(field.info.annotation)
        if isinstance(cls, type) and callable(getattr(cls, method, None)):
            value = cls()
            field.set(value)
    return value


def _is_composite(target: Any) -> bool:
    """Containers and models take their default as a JSON document."""
    origin = typing.get_origin(target) or target
    return isinstance(origin, type) and issubclass(
        origin, (list, tuple, set, frozenset, dict, BaseModel)
    )


def convert(annotation: Any, raw: str, *, field: str) -> Any:
    """Coerce the tag string *raw* to *annotation*.

    Raises:
        HandlerError: *raw* cannot be represented as *annotation*.
    """
    target = base_type(annotation)

    if raw.startswith("now(") and raw.endswith(")"):
        layout = raw[4:-1]
        current = helpers.now()
        if target is str:
            return current.strftime(layout) if layout else current.isoformat(timespec="seconds")
        if target is int:
            return int(current.timestamp())
        if target is datetime:
            return current

    if annotation is None or target is Any or target is str:
        return raw

    try:
        adapter = TypeAdapter(annotation)
        if _is_composite(target):
            return adapter.validate_json(raw)
        return adapter.validate_python(raw)
    except PydanticValidationError as exc:
        reason = exc.errors()[0]["msg"] if exc.errors() else str(exc)
        raise HandlerError(f"{field}: invalid default value {raw!r}: {reason}") from exc
    except TypeError as exc:
        raise HandlerError(f"{field}: unsupported type {target!r}") from exc


class SetterHandler(Handler):
    """Handler that assigns a value to the field.

    With the default runner the field value must implement
    :class:`Setter`; a ``None`` value is first replaced by an instance of
    the annotated class.
    """

    def __init__(self, parse: Parser | None = None, setter: Runner | None = None) -> None:
        self._parse = parse or identity_parser
        self._setter = setter or use_setter

    def parse(self, value: str) -> Any:
        return self._parse(value)

    def run(self, ctx: Any, root: Any, field: FieldRef, arg: Any) -> None:
        self._setter(ctx, root, field, arg)


def use_setter(_ctx: Any, _root: Any, field: FieldRef, arg: Any) -> None:
    value = fill_none(field, "set")
    if not isinstance(value, Setter):
        raise HandlerError(
            f"{field.path}({helpers.type_name(value)}) has not implemented the interface Setter"
        )
    value.set(arg)


def set_default(_ctx: Any, root: Any, field: FieldRef, arg: Any) -> None:
    """Fill a zero-valued field from the ``default`` tag argument."""
    current = field.value
    if not helpers.is_zero(current):
        return

    raw = str(arg)
    if raw.startswith("."):
        path = raw[1:]
        if not path:
            raise HandlerError(f"{field.path}: invalid default value")
        found, value = get_field_by_path(root, path)
        if not found:
            raise FieldPathError(path)
        field.set(value)
        return

    if current is not None and isinstance(current, Setter):
        current.set(raw)
        return

    field.set(convert(field.info.annotation, raw, field=field.path))


class DefaultHandler(SetterHandler):
    """Handler behind the ``default`` tag."""

    def __init__(self) -> None:
        super().__init__(setter=set_default)


class InjectHandler(Handler):
    """Handler that passes the parsed tag value to the field's ``inject``."""

    def __init__(self, parse: Parser | None = None) -> None:
        self._parse = parse or identity_parser

    def parse(self, value: str) -> Any:
        return self._parse(value)

    def run(self, ctx: Any, root: Any, field: FieldRef, arg: Any) -> None:
        value = fill_none(field, "inject")
        if not isinstance(value, Injector):
            raise HandlerError(
                f"{field.path}({helpers.type_name(value)}) has not implemented the interface Injector"
            )
        value.inject(arg)
