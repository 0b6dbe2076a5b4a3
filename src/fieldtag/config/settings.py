"""Unified settings: CLI flags, env vars and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``FIELDTAG_*`` prefix (``FIELDTAG_VALIDATION__TAG=check``)
  3. TOML file: ``fieldtag.toml`` or ``pyproject.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`fieldtag.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any, ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from fieldtag.config.discovery import find_config, read_config_table
from fieldtag.config.models import PluginsConfig, ReflectConfig, ValidationConfig
from fieldtag.structs.reflector import Reflector
from fieldtag.structs.setters import DefaultHandler, SetterHandler
from fieldtag.validation.builder import Builder
from fieldtag.validation.defaults import register_defaults
from fieldtag.validation.handler import ValidatorHandler


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from ``fieldtag.toml`` or ``[tool.fieldtag]`` in ``pyproject.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = read_config_table(toml_path)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class FieldTagSettings(BaseSettings):
    """Unified settings for fieldtag.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored in
    ``click.Context.obj`` at the CLI root level.

    Attributes:
        config_path: Config file in effect, or None when none was found.
        symbols: Extra rule symbols (``[symbols]`` table).
        oneof: Named ``oneof`` shorthands (``[oneof]`` table).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FIELDTAG_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    reflect: ReflectConfig = Field(default_factory=ReflectConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    symbols: dict[str, str | int | float] = Field(default_factory=dict)
    oneof: dict[str, list[str]] = Field(default_factory=dict)

    # Retained for type-checker visibility; not used at runtime.
    _toml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> FieldTagSettings:
        """Construct settings from CLI invocation.

        Discovers ``fieldtag.toml`` via walk-up from *cwd* (or uses the
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(cwd)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None


def builder_from_settings(settings: FieldTagSettings) -> Builder:
    """Build a :class:`Builder` with the default table plus configured extras."""
    builder = Builder(
        tag=settings.validation.tag,
        stop_tag=settings.reflect.stop_tag,
        name_tags=settings.validation.name_tags,
    )
    register_defaults(builder)
    builder.register_symbols(settings.symbols)
    for name, values in settings.oneof.items():
        builder.register_validator_oneof(name, *values)
    return builder


def reflector_from_settings(settings: FieldTagSettings, builder: Builder) -> Reflector:
    """Build a :class:`Reflector` carrying the standard handlers."""
    reflector = Reflector(
        stop_tag=settings.reflect.stop_tag,
        name_tags=settings.validation.name_tags,
    )
    reflector.register(settings.validation.tag, ValidatorHandler(builder))
    reflector.register("default", DefaultHandler())
    reflector.register("set", SetterHandler())
    return reflector
