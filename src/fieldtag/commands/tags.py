"""Command: show the parsed pairs of a field annotation string."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldtag.commands._base import FieldTagCommand

if TYPE_CHECKING:
    from fieldtag.commands._context import AppContext


@click.command(
    cls=FieldTagCommand,
    examples=[
        ("fieldtag tags 'json:\"name\" validate:\"min(1)\"'", ""),
        ("fieldtag tags 'reflect:\"-\" default:\".Other\"'", "stop marker"),
    ],
)
@click.argument("tag")
@click.pass_obj
def tags(app: AppContext, tag: str) -> None:
    """Parse the annotation string TAG into name/value pairs."""
    from fieldtag.services.rules import RuleService

    app.emit(RuleService(app.builder).tags(tag))
