"""Shared pytest fixtures for fieldtag tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from fieldtag.structs.reflector import Reflector
from fieldtag.structs.setters import DefaultHandler, SetterHandler
from fieldtag.validation.builder import Builder
from fieldtag.validation.defaults import register_defaults
from fieldtag.validation.handler import ValidatorHandler


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None]:
    """Undo configure_logging() calls made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def builder() -> Builder:
    """A fresh builder with the default functions and symbols."""
    b = Builder()
    register_defaults(b)
    return b


@pytest.fixture
def reflector(builder: Builder) -> Reflector:
    """A fresh reflector carrying the standard handlers."""
    r = Reflector()
    r.register("validate", ValidatorHandler(builder))
    r.register("default", DefaultHandler())
    r.register("set", SetterHandler())
    return r


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path]:
    """Run in an empty directory with no fieldtag config in the environment.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")``.
    """
    for name in ("FIELDTAG_CONFIG", "FIELDTAG_VALIDATION__TAG", "FIELDTAG_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path
