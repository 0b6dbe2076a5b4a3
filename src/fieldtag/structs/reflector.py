"""Reflector: recursive struct walker with tag dispatch.

For every exported field of a structure the reflector parses the field's
annotation string, hands each ``name:"value"`` pair to the handler
registered under ``name`` and then descends into nested structures:
directly held ones, and structure elements of lists and tuples.

The reserved stop name (``reflect`` by default) with a value of ``-`` or
a false boolean literal keeps the walker out of that field.

Handler registration is an initialisation-time operation. Registering or
unregistering handlers while other threads are reflecting is not
supported; callers must finish registration before concurrent use.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from fieldtag.cache import SnapshotCache
from fieldtag.errors import FieldTagError, HandlerParseError, NotAStructError, TagSyntaxError
from fieldtag.structs.fields import (
    DEFAULT_NAME_TAGS,
    FieldRef,
    is_sequence,
    is_struct,
    join_path,
    struct_fields,
)
from fieldtag.structs.handler import FunctionHandler, Handler, Runner
from fieldtag.structs.tags import iter_tags, unquote

logger = logging.getLogger(__name__)

STOP_TAG = "reflect"

_FALSE_LITERALS = frozenset({"0", "f", "F", "false", "FALSE", "False"})


@dataclass(frozen=True)
class TagValue:
    """Cached result of unquoting and pre-parsing one tag value."""

    value: str
    arg: Any


def is_stop_value(quoted: str) -> bool:
    """Whether a quoted stop-tag value means "do not descend"."""
    if quoted == '"-"':
        return True
    try:
        value = unquote(quoted).strip()
    except TagSyntaxError:
        return False
    return value == "-" or value in _FALSE_LITERALS


class Reflector:
    """Walks structures and dispatches field tags to registered handlers.

    Subclasses specialise the walk by overriding :meth:`walk`,
    :meth:`visit`, :meth:`dispatch` or :meth:`descend`.
    """

    def __init__(
        self,
        *,
        stop_tag: str = STOP_TAG,
        name_tags: tuple[str, ...] | list[str] = DEFAULT_NAME_TAGS,
    ) -> None:
        self.stop_tag = stop_tag
        self.name_tags = tuple(name_tags)
        self._handlers: dict[str, Handler] = {}
        self._tags: SnapshotCache[tuple[str, str], TagValue] = SnapshotCache()

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def register(self, name: str, handler: Handler) -> None:
        """Register *handler* under *name*, replacing any previous one."""
        if not name:
            raise ValueError("the handler name must not be empty")
        if name in self._handlers:
            logger.debug("Replacing tag handler: %s", name)
        else:
            logger.debug("Registered tag handler: %s", name)
        self._handlers[name] = handler

    def register_func(self, name: str, runner: Runner) -> None:
        """Register a runner ``(ctx, root, field, arg)`` keeping the raw value as arg."""
        self.register(name, FunctionHandler(runner))

    def register_simple_func(self, name: str, func: Callable[[FieldRef, Any], None]) -> None:
        """Register a runner that only needs the field and the tag value."""
        self.register_func(name, lambda _ctx, _root, field, arg: func(field, arg))

    def unregister(self, name: str) -> None:
        """Remove the handler registered under *name*, if any."""
        self._handlers.pop(name, None)

    def get_handler(self, name: str) -> Handler | None:
        return self._handlers.get(name)

    @property
    def handlers(self) -> Mapping[str, Handler]:
        """Read-only view of the registered handlers."""
        return MappingProxyType(self._handlers)

    # ------------------------------------------------------------------
    # Walk
    # ------------------------------------------------------------------

    def reflect(self, value: Any, ctx: Any = None) -> None:
        """Walk the structure *value*, running every registered tag handler.

        ``None`` is accepted and ignored. The first exception raised by a
        handler aborts the walk.

        Raises:
            NotAStructError: *value* is neither None nor a structure.
        """
        if value is None:
            return
        if not is_struct(value):
            raise NotAStructError(value)
        self.walk(ctx, value, value, "")

    def walk(self, ctx: Any, root: Any, value: Any, prefix: str) -> None:
        """Visit each exported field of the structure *value*."""
        for info in struct_fields(type(value)):
            path = join_path(prefix, info.display_name(self.name_tags))
            self.visit(ctx, root, FieldRef(value, info, path))

    def visit(self, ctx: Any, root: Any, field: FieldRef) -> None:
        if not self.dispatch(ctx, root, field):
            self.descend(ctx, root, field)

    def dispatch(self, ctx: Any, root: Any, field: FieldRef) -> bool:
        """Run the handlers named in the field's tag. Returns the stop flag."""
        stop = False
        for name, quoted in iter_tags(field.info.tag):
            if name == self.stop_tag and is_stop_value(quoted):
                stop = True
                continue

            handler = self._handlers.get(name)
            if handler is None:
                continue
            handler.run(ctx, root, field, self.tag_arg(handler, name, quoted))
        return stop

    def descend(self, ctx: Any, root: Any, field: FieldRef) -> None:
        """Recurse into a nested structure or the structures of a sequence."""
        value = field.value
        if is_struct(value):
            self.walk(ctx, root, value, field.path)
        elif is_sequence(value):
            for index, item in enumerate(value):
                if is_struct(item):
                    self.walk(ctx, root, item, join_path(field.path, str(index)))

    # ------------------------------------------------------------------
    # Tag cache
    # ------------------------------------------------------------------

    def tag_arg(self, handler: Handler, name: str, quoted: str) -> Any:
        """Return the pre-parsed argument for ``name:quoted``, parsing it once.

        Raises:
            TagSyntaxError: the quoted value cannot be unquoted.
            HandlerParseError: ``handler.parse`` rejected the value.
        """
        return self._tags.get_or_create(
            (name, quoted), lambda: self._parse_tag(handler, name, quoted)
        ).arg

    def _parse_tag(self, handler: Handler, name: str, quoted: str) -> TagValue:
        try:
            value = unquote(quoted)
        except TagSyntaxError as exc:
            raise TagSyntaxError(f"invalid tag '{name}' value: {exc}") from exc

        try:
            arg = handler.parse(value)
        except FieldTagError:
            raise
        except Exception as exc:
            raise HandlerParseError(name, value, str(exc)) from exc

        logger.debug("Parsed tag %s:%s", name, quoted)
        return TagValue(value=value, arg=arg)

    @property
    def cached_tags(self) -> Mapping[tuple[str, str], TagValue]:
        """Snapshot of the tag cache."""
        return self._tags.snapshot()
