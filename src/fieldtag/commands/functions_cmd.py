"""Command: list registered rule functions and symbols."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldtag.commands._base import FieldTagCommand

if TYPE_CHECKING:
    from fieldtag.commands._context import AppContext


@click.command(
    "functions",
    cls=FieldTagCommand,
    examples=[
        ("fieldtag functions", ""),
        ("fieldtag --json functions", "machine-readable"),
        ("fieldtag --no-plugins functions", "built-in table only"),
    ],
)
@click.pass_obj
def functions_cmd(app: AppContext) -> None:
    """List rule functions and symbols available to rules."""
    from fieldtag.services.rules import RuleService

    app.emit(RuleService(app.builder).functions())
