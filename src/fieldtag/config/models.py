"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, fieldtag.toml only contains
overrides::

    [validation]
    tag = "check"
    name_tags = ["json"]

    [reflect]
    stop_tag = "walk"

    [symbols]
    region = "eu-west-1"

    [oneof]
    color = ["red", "green", "blue"]
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from fieldtag.structs.fields import DEFAULT_NAME_TAGS
from fieldtag.structs.reflector import STOP_TAG
from fieldtag.validation.builder import DEFAULT_TAG

# --- fieldtag.toml sections ---


class ValidationConfig(BaseModel):
    """[validation] section."""

    model_config = {"frozen": True}

    tag: str = DEFAULT_TAG
    name_tags: list[str] = Field(default_factory=lambda: list(DEFAULT_NAME_TAGS))

    @field_validator("tag")
    @classmethod
    def _tag_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("the validation tag must not be empty")
        return value.strip()


class ReflectConfig(BaseModel):
    """[reflect] section."""

    model_config = {"frozen": True}

    stop_tag: str = STOP_TAG


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True


class FieldTagConfig(BaseModel):
    """Root configuration model for fieldtag.toml."""

    model_config = {"frozen": True}

    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    reflect: ReflectConfig = Field(default_factory=ReflectConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    symbols: dict[str, str | int | float] = Field(default_factory=dict)
    oneof: dict[str, list[str]] = Field(default_factory=dict)
