"""Process-wide reflector with the ``validate``, ``default`` and ``set`` handlers.

Example::

    @dataclass
    class Page:
        size: int = tagged('default:"20" validate:"min(1) && max(100)"', default=0)

    page = Page()
    reflect(page)  # page.size == 20
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fieldtag.structs.fields import FieldRef
from fieldtag.structs.handler import Handler, Runner
from fieldtag.structs.reflector import Reflector
from fieldtag.structs.setters import DefaultHandler, SetterHandler
from fieldtag.validation import DEFAULT_BUILDER
from fieldtag.validation.handler import ValidatorHandler

DEFAULT_REFLECTOR = Reflector()
DEFAULT_REFLECTOR.register("validate", ValidatorHandler(DEFAULT_BUILDER))
DEFAULT_REFLECTOR.register("default", DefaultHandler())
DEFAULT_REFLECTOR.register("set", SetterHandler())


def register(name: str, handler: Handler) -> None:
    DEFAULT_REFLECTOR.register(name, handler)


def register_func(name: str, runner: Runner) -> None:
    DEFAULT_REFLECTOR.register_func(name, runner)


def register_simple_func(name: str, func: Callable[[FieldRef, Any], None]) -> None:
    DEFAULT_REFLECTOR.register_simple_func(name, func)


def unregister(name: str) -> None:
    DEFAULT_REFLECTOR.unregister(name)


def reflect(value: Any, ctx: Any = None) -> None:
    """Run every registered handler over the structure *value*."""
    DEFAULT_REFLECTOR.reflect(value, ctx)
