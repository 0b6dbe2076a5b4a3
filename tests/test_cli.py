"""Tests for the root fieldtag CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from fieldtag import __version__
from fieldtag.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "fieldtag" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_cwd")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("flag", ["--json", "-v", "--verbose", "--log-json", "--no-plugins"])
def test_global_flags_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/none.toml", "--version"])
    assert result.exit_code == 0


@pytest.mark.parametrize("name", ["check", "tags", "functions", "handlers"])
def test_command_registered(cli_runner: CliRunner, name: str) -> None:
    result = cli_runner.invoke(cli, [name, "--help"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_short_version_flag(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-V"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_config_option_rejects_directory(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["-c", str(tmp_path), "functions"])
    assert result.exit_code == 2


def test_root_examples(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--examples"])
    assert result.exit_code == 0
    assert result.output.startswith("Examples for 'cli':")
    assert "# validate one value" in result.output


@pytest.mark.usefixtures("_isolated_cwd")
class TestOverrides:
    def test_tag_renames_validation_handler(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--tag", "check", "handlers"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["handlers"] == ["check", "default", "set"]

    def test_tag_beats_config_file(self, cli_runner: CliRunner, _isolated_cwd: Path) -> None:
        (_isolated_cwd / "fieldtag.toml").write_text('[validation]\ntag = "rules"\n')
        result = cli_runner.invoke(cli, ["--json", "--tag", "check", "handlers"])
        assert "check" in json.loads(result.output)["data"]["handlers"]

    def test_config_file_kept_without_tag(self, cli_runner: CliRunner, _isolated_cwd: Path) -> None:
        (_isolated_cwd / "fieldtag.toml").write_text('[validation]\ntag = "rules"\n')
        result = cli_runner.invoke(cli, ["--json", "handlers"])
        assert "rules" in json.loads(result.output)["data"]["handlers"]

    def test_empty_tag_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--tag", " ", "handlers"])
        assert result.exit_code == 2
        assert "invalid settings" in result.output

    def test_env_verbose_not_overridden(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FIELDTAG_VERBOSE", "1")
        logger = logging.getLogger("fieldtag")
        monkeypatch.setattr(logger, "level", logger.level)
        result = cli_runner.invoke(cli, ["functions"])
        assert result.exit_code == 0
        assert "Registered tag handler" in result.output

    def test_no_plugins_skips_local_plugins(
        self, cli_runner: CliRunner, _isolated_cwd: Path
    ) -> None:
        plugin_dir = _isolated_cwd / ".fieldtag" / "plugins"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "broken.py").write_text("raise RuntimeError('must not load')\n")
        result = cli_runner.invoke(cli, ["--no-plugins", "-v", "check", "zero", ""])
        assert result.exit_code == 0
        assert "must not load" not in result.output
