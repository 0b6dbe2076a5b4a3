"""Command: list the annotation names the reflector dispatches."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldtag.commands._base import FieldTagCommand

if TYPE_CHECKING:
    from fieldtag.commands._context import AppContext


@click.command(
    "handlers",
    cls=FieldTagCommand,
    examples=[
        ("fieldtag handlers", ""),
        ("fieldtag --tag check handlers", "validator under another name"),
    ],
)
@click.pass_obj
def handlers_cmd(app: AppContext) -> None:
    """List tag handlers, including those added by plugins."""
    from fieldtag.services.rules import RuleService

    app.emit(RuleService(app.builder, app.reflector).handlers())
