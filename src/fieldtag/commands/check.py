"""Command: validate a literal value against a rule."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldtag.commands._base import FieldTagCommand
from fieldtag.services.rules import VALUE_TYPES

if TYPE_CHECKING:
    from fieldtag.commands._context import AppContext


@click.command(
    cls=FieldTagCommand,
    examples=[
        ("fieldtag check 'min(1) && max(10)' 5 --type int", "integer range"),
        ("fieldtag check 'oneof(\"a\", \"b\")' c", "fails: not a member"),
        ("fieldtag check 'zero || ip' 10.0.0.1", "empty or an IP address"),
        ("fieldtag check 'array(min(1))' '[1, 2, 3]' --type json", "rule per element"),
    ],
)
@click.argument("rule")
@click.argument("value")
@click.option(
    "--type",
    "value_type",
    type=click.Choice(VALUE_TYPES),
    default="str",
    show_default=True,
    help="How to interpret VALUE.",
)
@click.pass_obj
def check(app: AppContext, rule: str, value: str, value_type: str) -> None:
    """Validate VALUE against the rule RULE."""
    from fieldtag.services.rules import RuleService

    app.emit(RuleService(app.builder).check(rule, value, value_type=value_type))
