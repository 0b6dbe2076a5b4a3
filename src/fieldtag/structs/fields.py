"""Struct field metadata: which values are structures and what their fields carry.

A *structure* is a dataclass instance or a pydantic model instance. Each
exported field (name not starting with ``_``) may carry an annotation
string, attached in any of these ways::

    @dataclass
    class Page:
        size: int = tagged('default:"10" validate:"min(1) && max(100)"', default=0)
        sort: Annotated[str, Tag('validate:"oneof(\\"asc\\", \\"desc\\")"')] = "asc"

    class User(BaseModel):
        name: Annotated[str, Tag('json:"user_name" validate:"required"')]
        age: int = Field(0, json_schema_extra={"tag": 'validate:"min(18)"'})
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import sys
import typing
from dataclasses import dataclass
from typing import Annotated, Any

import pydantic
from pydantic import BaseModel
from pydantic.fields import FieldInfo as PydanticFieldInfo

from fieldtag.errors import AnnotationError, FieldNotSettableError
from fieldtag.structs.tags import lookup_tag

TAG_METADATA_KEY = "tag"

DEFAULT_NAME_TAGS: tuple[str, ...] = ("json", "query", "header")


@dataclass(frozen=True)
class Tag:
    """``Annotated`` marker carrying a field annotation string."""

    value: str


def tagged(tag: str, **kwargs: Any) -> Any:
    """Declare a dataclass field carrying the annotation string *tag*.

    Remaining keyword arguments go to :func:`dataclasses.field`.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_METADATA_KEY] = tag
    return dataclasses.field(metadata=metadata, **kwargs)


@dataclass(frozen=True)
class FieldInfo:
    """Static description of one exported structure field.

    Attributes:
        name: Attribute name on the owning object.
        tag: Raw annotation string (empty when the field has none).
        alias: Pydantic alias, if any.
        annotation: Declared type with ``Annotated`` extras stripped.
    """

    name: str
    tag: str = ""
    alias: str | None = None
    annotation: Any = None

    def display_name(self, name_tags: tuple[str, ...] | list[str] = DEFAULT_NAME_TAGS) -> str:
        """Name used in error paths.

        The first non-empty value of the *name_tags* annotations wins
        (anything after a comma is dropped, ``-`` is ignored), then the
        pydantic alias, then the attribute name.
        """
        for key in name_tags:
            value = lookup_tag(self.tag, key)
            if value is None:
                continue
            value = value.split(",", 1)[0].strip()
            if value and value != "-":
                return value
        return self.alias or self.name


def is_struct(value: object) -> bool:
    """Whether *value* is a structure instance (not a structure class)."""
    if isinstance(value, BaseModel):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_sequence(value: object) -> bool:
    """Whether *value* is an array-like container whose elements may be walked."""
    return isinstance(value, (list, tuple))


@functools.cache
def struct_fields(cls: type) -> tuple[FieldInfo, ...]:
    """Exported fields of the structure type *cls*, in declaration order."""
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        return tuple(
            _pydantic_field(name, info)
            for name, info in cls.model_fields.items()
            if not name.startswith("_")
        )
    if dataclasses.is_dataclass(cls):
        return _dataclass_fields(cls)
    return ()


def _pydantic_field(name: str, info: PydanticFieldInfo) -> FieldInfo:
    tag = ""
    for meta in info.metadata:
        if isinstance(meta, Tag):
            tag = meta.value
            break
    else:
        extra = info.json_schema_extra
        if isinstance(extra, dict) and isinstance(extra.get(TAG_METADATA_KEY), str):
            tag = extra[TAG_METADATA_KEY]
    return FieldInfo(name=name, tag=tag, alias=info.alias, annotation=info.annotation)


def _dataclass_hints(cls: type) -> dict[str, Any]:
    """Type hints of *cls* with ``Annotated`` extras kept.

    When the class-wide lookup fails (a forward reference to a local class,
    a ``TYPE_CHECKING``-only import), each annotation is evaluated on its
    own against the defining class's module and namespace, so one
    unresolvable field does not hide the others. Annotations that still
    fail are returned as strings.
    """
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, AttributeError, TypeError):
        pass

    hints: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        module = sys.modules.get(klass.__module__)
        globalns = vars(module) if module is not None else {}
        localns = {**vars(klass), klass.__name__: klass}
        for name, annotation in inspect.get_annotations(klass).items():
            if not isinstance(annotation, str):
                hints[name] = annotation
                continue
            try:
                hints[name] = eval(annotation, globalns, localns)
            except (NameError, AttributeError, TypeError):
                hints[name] = annotation
    return hints


def _dataclass_fields(cls: type) -> tuple[FieldInfo, ...]:
    hints = _dataclass_hints(cls)

    result: list[FieldInfo] = []
    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue
        hint = hints.get(f.name, f.type)
        tag = f.metadata.get(TAG_METADATA_KEY, "")
        if isinstance(hint, str) and not tag and "Annotated" in hint:
            raise AnnotationError(cls, f.name, hint)
        if typing.get_origin(hint) is Annotated:
            base, *extras = typing.get_args(hint)
            if not tag:
                tag = next((e.value for e in extras if isinstance(e, Tag)), "")
            hint = base
        result.append(FieldInfo(name=f.name, tag=tag, annotation=hint))
    return tuple(result)


def join_path(prefix: str, name: str) -> str:
    """Append *name* to the dotted *prefix*."""
    return f"{prefix}.{name}" if prefix else name


@dataclass(frozen=True)
class FieldRef:
    """Live handle on one field of one structure instance.

    Handlers receive a FieldRef so they can both read and replace the
    value, even for immutable field types.
    """

    owner: Any
    info: FieldInfo
    path: str

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def value(self) -> Any:
        return getattr(self.owner, self.info.name)

    def set(self, value: Any) -> None:
        """Assign *value* to the field.

        Raises:
            FieldNotSettableError: the owner is frozen or rejects the value.
        """
        try:
            setattr(self.owner, self.info.name, value)
        except (AttributeError, TypeError, pydantic.ValidationError) as exc:
            raise FieldNotSettableError(self.path or self.info.name) from exc


def get_field_by_path(root: object, path: str) -> tuple[bool, Any]:
    """Resolve the dotted attribute *path* starting at the structure *root*.

    A leading ``.`` is ignored. Returns ``(found, value)``.

    Examples:
        >>> @dataclass
        ... class Inner:
        ...     x: int = 1
        >>> @dataclass
        ... class Outer:
        ...     inner: Inner = dataclasses.field(default_factory=Inner)
        >>> get_field_by_path(Outer(), ".inner.x")
        (True, 1)
        >>> get_field_by_path(Outer(), "inner.y")
        (False, None)
    """
    path = path.removeprefix(".")
    if not path:
        return False, None

    current: Any = root
    for name in path.split("."):
        if not is_struct(current) or not name or not hasattr(current, name):
            return False, None
        current = getattr(current, name)
    return True, current
