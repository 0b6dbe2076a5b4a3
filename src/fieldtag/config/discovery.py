"""Locate and read the fieldtag configuration table.

Settings live either in a dedicated ``fieldtag.toml`` or in the
``[tool.fieldtag]`` table of a ``pyproject.toml``. The nearest directory
holding one of them wins, walking up from the working directory; within
one directory ``fieldtag.toml`` is preferred. ``FIELDTAG_CONFIG`` names
a file explicitly and disables the walk.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from fieldtag.config.models import FieldTagConfig

CONFIG_FILENAME = "fieldtag.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "FIELDTAG_CONFIG"


def _read_toml(path: Path) -> dict[str, Any]:
    return tomllib.loads(path.read_text(encoding="utf-8"))


def _pyproject_table(data: dict[str, Any]) -> dict[str, Any] | None:
    table = data.get("tool", {}).get("fieldtag")
    return table if isinstance(table, dict) else None


def _candidates(directory: Path) -> list[Path]:
    return [directory / CONFIG_FILENAME, directory / PYPROJECT_FILENAME]


def find_config(start: Path | None = None) -> Path | None:
    """Return the configuration file in effect for *start* (default: cwd).

    A ``pyproject.toml`` only counts when it carries ``[tool.fieldtag]``;
    an unreadable one is skipped. An explicit ``FIELDTAG_CONFIG`` that
    does not exist yields None.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for current in (directory, *directory.parents):
        for candidate in _candidates(current):
            if not candidate.is_file():
                continue
            if candidate.name == CONFIG_FILENAME:
                return candidate
            try:
                if _pyproject_table(_read_toml(candidate)) is not None:
                    return candidate
            except (OSError, tomllib.TOMLDecodeError):
                continue
    return None


def read_config_table(path: Path) -> dict[str, Any]:
    """Return the raw settings table stored in *path*.

    Raises:
        tomllib.TOMLDecodeError: *path* is not valid TOML.
    """
    data = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        return _pyproject_table(data) or {}
    return data


def load_config(path: Path | None = None, cwd: Path | None = None) -> FieldTagConfig:
    """Validate the settings table of *path*, discovered from *cwd* when None.

    Without any configuration file the code defaults apply.
    """
    path = path or find_config(cwd)
    if path is None:
        return FieldTagConfig()
    return FieldTagConfig.model_validate(read_config_table(path))
