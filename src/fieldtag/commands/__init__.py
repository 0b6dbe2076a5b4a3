"""Subcommand modules for fieldtag.

``register_commands()`` uses deferred imports to keep ``fieldtag --help``
fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from fieldtag.commands.check import check
    from fieldtag.commands.functions_cmd import functions_cmd
    from fieldtag.commands.handlers_cmd import handlers_cmd
    from fieldtag.commands.tags import tags

    cli.add_command(check)
    cli.add_command(tags)
    cli.add_command(functions_cmd)
    cli.add_command(handlers_cmd)
