"""Root ``fieldtag`` command group.

Global options become init overrides of :class:`FieldTagSettings`;
options left unset are not passed at all, so environment variables and
the configuration file still apply to them.
"""

from __future__ import annotations

from typing import Any

import click
import pydantic

from fieldtag import __version__
from fieldtag.commands import register_commands
from fieldtag.commands._base import FieldTagGroup
from fieldtag.commands._context import AppContext
from fieldtag.config.settings import FieldTagSettings


def _overrides(
    *, json_output: bool, verbose: bool, log_json: bool, tag: str | None, no_plugins: bool
) -> dict[str, Any]:
    flags: dict[str, Any] = {
        name: True
        for name, given in (
            ("json_output", json_output),
            ("verbose", verbose),
            ("log_json", log_json),
        )
        if given
    }
    if tag is not None:
        flags["validation"] = {"tag": tag}
    if no_plugins:
        flags["plugins"] = {"enabled": False}
    return flags


@click.group(
    cls=FieldTagGroup,
    invoke_without_command=True,
    examples=[
        ("fieldtag check 'min(1)' abc", "validate one value"),
        ("fieldtag -c ci/fieldtag.toml functions", "explicit config file"),
        ("fieldtag --tag check --json handlers", "JSON output, custom tag"),
    ],
)
@click.version_option(__version__, "-V", "--version", prog_name="fieldtag")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr.")
@click.option("--log-json", is_flag=True, help="Log records as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Configuration file to use instead of the discovered one.",
)
@click.option("--tag", metavar="NAME", default=None, help="Annotation name holding rules.")
@click.option("--no-plugins", is_flag=True, help="Skip entry-point and local plugins.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    tag: str | None,
    no_plugins: bool,
) -> None:
    """fieldtag: check values against validation rules and inspect field tags."""
    flags = _overrides(
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
        tag=tag,
        no_plugins=no_plugins,
    )
    try:
        settings = FieldTagSettings.from_cli(config_path=config_path, **flags)
    except pydantic.ValidationError as exc:
        raise click.UsageError(f"invalid settings: {exc.errors()[0]['msg']}", ctx) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
