"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. The rule builder and the reflector are created
together on first use so ``--help`` and ``--version`` never load plugins.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from fieldtag.output.formatters import format_result

if TYPE_CHECKING:
    from fieldtag.config.settings import FieldTagSettings
    from fieldtag.services.result import ServiceResult
    from fieldtag.structs.reflector import Reflector
    from fieldtag.validation.builder import Builder

logger = logging.getLogger(__name__)

LOCAL_PLUGIN_DIR = Path(".fieldtag") / "plugins"


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: FieldTagSettings) -> None:
        self.settings = settings
        self._builder: Builder | None = None
        self._reflector: Reflector | None = None

        from fieldtag.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def builder(self) -> Builder:
        """The configured rule builder."""
        if self._builder is None:
            self._setup()
        assert self._builder is not None
        return self._builder

    @property
    def reflector(self) -> Reflector:
        """The reflector whose validation handler uses :attr:`builder`."""
        if self._reflector is None:
            self._setup()
        assert self._reflector is not None
        return self._reflector

    def _setup(self) -> None:
        from fieldtag.config.settings import builder_from_settings, reflector_from_settings

        builder = builder_from_settings(self.settings)
        reflector = reflector_from_settings(self.settings, builder)
        if self.settings.plugins.enabled:
            self._load_plugins(builder, reflector)
        self._builder, self._reflector = builder, reflector

    def _load_plugins(self, builder: Builder, reflector: Reflector) -> None:
        from fieldtag.plugins.manager import PluginManager

        base = self.settings.config_path.parent if self.settings.config_path else Path.cwd()
        manager = PluginManager()
        names = manager.discover_and_load(local_dir=base / LOCAL_PLUGIN_DIR)
        if names:
            logger.debug("Loaded plugins: %s", ", ".join(names))
        manager.apply(builder=builder, reflector=reflector)

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and exit with its status.

        Success goes to stdout, with warnings on stderr so piped output
        stays clean; failure goes to stderr and exits 1.
        """
        json_output = self.settings.json_output
        output = format_result(result, json_output=json_output)
        click.echo(output, err=not result.ok)
        if result.ok and not json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if result.exit_code:
            raise SystemExit(result.exit_code)
