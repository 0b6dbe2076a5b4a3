"""Pluggy hook specifications for fieldtag setup extensions.

Both hooks run at initialisation time, before any validation traffic,
and receive the object to extend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from fieldtag.structs.reflector import Reflector
    from fieldtag.validation.builder import Builder

hookspec = pluggy.HookspecMarker("fieldtag")


class FieldTagHookSpec:
    """Hook specifications for the fieldtag plugin system."""

    @hookspec
    def register_validation_functions(self, builder: Builder) -> None:
        """Register extra rule functions or symbols into *builder*."""

    @hookspec
    def register_tag_handlers(self, reflector: Reflector) -> None:
        """Register extra tag handlers into *reflector*."""
