"""Click base classes shared by the fieldtag commands.

Each command may carry ``examples``: ``(command line, description)``
pairs. ``--examples`` prints them as an aligned two-column listing and
exits, so ``--help`` stays short.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

Example = tuple[str, str]


def format_examples(path: str, examples: Sequence[Example]) -> str:
    """Render *examples* under a heading naming the command *path*."""
    width = max(len(line) for line, _ in examples)
    rows = [
        f"  {line.ljust(width)}  # {about}" if about else f"  {line}" for line, about in examples
    ]
    return "\n".join([f"Examples for '{path}':", "", *rows])


class _ExamplesMixin:
    """Adds an eager ``--examples`` flag when examples are given."""

    examples: tuple[Example, ...]
    params: list[click.Parameter]

    def _init_examples(self, examples: Sequence[Example] | None) -> None:
        self.examples = tuple(examples or ())
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(format_examples(ctx.command_path, self.examples))
            ctx.exit(0)


class FieldTagCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: Sequence[Example] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class FieldTagGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands default to :class:`FieldTagCommand`."""

    command_class = FieldTagCommand

    def __init__(self, *args: Any, examples: Sequence[Example] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
