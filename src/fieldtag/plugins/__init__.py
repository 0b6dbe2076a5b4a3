"""Plugin system: pluggy hooks for extra rule functions and tag handlers.

Plugins implement hooks marked with ``hookimpl``::

    from fieldtag.plugins import hookimpl

    class SlugPlugin:
        @hookimpl
        def register_validation_functions(self, builder):
            builder.register_validator_func_bool_string(
                "slug", str.isidentifier, "the string is not a slug"
            )
"""

from __future__ import annotations

import pluggy

hookimpl = pluggy.HookimplMarker("fieldtag")

__all__ = ["hookimpl"]
