"""Tests for the check, tags, functions and handlers commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from fieldtag.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestCheckCommand:
    def test_pass(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "min(1) && max(10)", "5", "--type", "int"])
        assert result.exit_code == 0
        assert "OK: check" in result.output

    def test_failure_exits_1(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", 'oneof("a", "b")', "c"])
        assert result.exit_code == 1
        assert "ERROR: check: the string 'c' is not one of [a b]" in result.output

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "check", "zero || min(3)", "abcd"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["rule"] == "(zero || min(3))"

    def test_json_failure(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "check", "min(3)", "ab"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["error"]["code"] == "validation_failed"

    def test_invalid_rule(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "min(", "1"])
        assert result.exit_code == 1
        assert "invalid rule" in result.output

    def test_bad_type_choice(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "zero", "0", "--type", "bytes"])
        assert result.exit_code == 2


@pytest.mark.usefixtures("_isolated_cwd")
class TestTagsCommand:
    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["tags", 'json:"id" reflect:"-"'])
        assert result.exit_code == 0
        assert 'json: "id"' in result.output
        assert 'reflect: "-"  (stop)' in result.output

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "tags", 'validate:"min(1)"'])
        data = json.loads(result.output)
        assert data["data"]["tags"] == [{"name": "validate", "value": "min(1)", "stop": False}]


@pytest.mark.usefixtures("_isolated_cwd")
class TestFunctionsCommand:
    def test_lists_functions(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["functions"])
        assert result.exit_code == 0
        assert "oneof" in result.output

    def test_config_extends_table(self, cli_runner: CliRunner, _isolated_cwd: Path) -> None:
        (_isolated_cwd / "fieldtag.toml").write_text(
            '[symbols]\nregion = "eu"\n[oneof]\ncolor = ["red", "blue"]\n'
        )
        result = cli_runner.invoke(cli, ["--json", "functions"])
        data = json.loads(result.output)
        assert "color" in data["data"]["functions"]
        assert data["data"]["symbols"]["region"] == "eu"

    def test_config_oneof_usable_in_check(self, cli_runner: CliRunner, _isolated_cwd: Path) -> None:
        (_isolated_cwd / "fieldtag.toml").write_text('[oneof]\ncolor = ["red", "blue"]\n')
        assert cli_runner.invoke(cli, ["check", "color", "red"]).exit_code == 0
        assert cli_runner.invoke(cli, ["check", "color", "green"]).exit_code == 1

    def test_local_plugins_loaded(self, cli_runner: CliRunner, _isolated_cwd: Path) -> None:
        plugin_dir = _isolated_cwd / ".fieldtag" / "plugins"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "slug.py").write_text(
            "from fieldtag.plugins import hookimpl\n\n\n"
            "class SlugPlugin:\n"
            "    @hookimpl\n"
            "    def register_validation_functions(self, builder):\n"
            '        builder.register_validator_func_bool_string("slug", str.isidentifier, "no")\n'
        )
        result = cli_runner.invoke(cli, ["check", "slug", "a_b"])
        assert result.exit_code == 0

    def test_plugins_disabled(self, cli_runner: CliRunner, _isolated_cwd: Path) -> None:
        (_isolated_cwd / "fieldtag.toml").write_text("[plugins]\nenabled = false\n")
        plugin_dir = _isolated_cwd / ".fieldtag" / "plugins"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "slug.py").write_text("raise RuntimeError('must not load')\n")
        result = cli_runner.invoke(cli, ["check", "zero", ""])
        assert result.exit_code == 0


_UPPER_PLUGIN_SRC = """\
from fieldtag.plugins import hookimpl


class UpperPlugin:
    @hookimpl
    def register_tag_handlers(self, reflector):
        reflector.register_simple_func("upper", lambda field, arg: None)
"""


@pytest.mark.usefixtures("_isolated_cwd")
class TestHandlersCommand:
    def test_lists_standard_handlers(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["handlers"])
        assert result.exit_code == 0
        assert "  handlers: default set validate" in result.output
        assert "  stop_tag: reflect" in result.output

    def test_config_stop_tag(self, cli_runner: CliRunner, _isolated_cwd: Path) -> None:
        (_isolated_cwd / "fieldtag.toml").write_text('[reflect]\nstop_tag = "walk"\n')
        result = cli_runner.invoke(cli, ["--json", "handlers"])
        assert json.loads(result.output)["data"]["stop_tag"] == "walk"

    def test_local_plugin_adds_handler(self, cli_runner: CliRunner, _isolated_cwd: Path) -> None:
        plugin_dir = _isolated_cwd / ".fieldtag" / "plugins"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "upper.py").write_text(_UPPER_PLUGIN_SRC)
        result = cli_runner.invoke(cli, ["--json", "handlers"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["handlers"] == [
            "default",
            "set",
            "upper",
            "validate",
        ]

    def test_no_plugins_hides_plugin_handler(
        self, cli_runner: CliRunner, _isolated_cwd: Path
    ) -> None:
        plugin_dir = _isolated_cwd / ".fieldtag" / "plugins"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "upper.py").write_text(_UPPER_PLUGIN_SRC)
        result = cli_runner.invoke(cli, ["--no-plugins", "handlers"])
        assert "upper" not in result.output


EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["check", "--examples"], ["fieldtag check", "--type int"]),
    (["tags", "--examples"], ["fieldtag tags"]),
    (["functions", "--examples"], ["fieldtag functions"]),
    (["handlers", "--examples"], ["fieldtag handlers", "# validator under another name"]),
]


class TestExamples:
    @pytest.mark.parametrize(("args", "keywords"), EXAMPLES_COMMANDS)
    def test_examples(self, cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0
        assert "Examples for" in result.output
        for keyword in keywords:
            assert keyword in result.output
