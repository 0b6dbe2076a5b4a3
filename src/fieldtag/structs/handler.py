"""Tag handler contract.

A handler interprets one annotation name. ``parse`` turns the raw
(unquoted) tag value into an argument once; the reflector memoises the
result per ``(name, quoted value)``. ``run`` is then called for every
field carrying the tag, with that pre-parsed argument.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fieldtag.structs.fields import FieldRef

Parser = Callable[[str], Any]
Runner = Callable[[Any, Any, "FieldRef", Any], None]


def identity_parser(value: str) -> Any:
    """Parser that keeps the unquoted tag value as the argument."""
    return value


class Handler(ABC):
    """A named capability attached to a field annotation."""

    def parse(self, value: str) -> Any:
        """Pre-parse the unquoted tag value; must be pure.

        Raising here marks the annotation itself as malformed.
        """
        return value

    @abstractmethod
    def run(self, ctx: Any, root: Any, field: FieldRef, arg: Any) -> None:
        """Apply the handler to *field* of a structure rooted at *root*.

        Args:
            ctx: Caller-supplied context, passed through untouched.
            root: Top-level structure being reflected.
            field: Handle on the field carrying the tag.
            arg: Result of :meth:`parse` for this tag value.
        """
        ...


class FunctionHandler(Handler):
    """Handler assembled from a runner callable and an optional parser."""

    def __init__(self, run: Runner, parse: Parser | None = None) -> None:
        self._run = run
        self._parse = parse or identity_parser

    def parse(self, value: str) -> Any:
        return self._parse(value)

    def run(self, ctx: Any, root: Any, field: FieldRef, arg: Any) -> None:
        self._run(ctx, root, field, arg)


def new_handler(parse: Parser | None, run: Runner) -> Handler:
    """Build a :class:`Handler` from plain functions."""
    return FunctionHandler(run, parse)
