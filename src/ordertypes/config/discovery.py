"""Locate the project configuration.

A project is configured either by a dedicated ``ordertypes.toml`` or by a
``[tool.ordertypes]`` table in ``pyproject.toml``. The nearest directory
holding either wins; within one directory the dedicated file wins.
``ORDERTYPES_CONFIG`` names a file directly and disables the search.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "ordertypes.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "ORDERTYPES_CONFIG"


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return isinstance(data.get("tool", {}).get("ordertypes"), dict)


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), if any."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        dedicated = directory / CONFIG_FILENAME
        if dedicated.is_file():
            return dedicated
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None


def config_section(path: Path, data: dict[str, Any]) -> dict[str, Any]:
    """Select the ordertypes settings out of a parsed config file."""
    if path.name == PYPROJECT_FILENAME:
        section = data.get("tool", {}).get("ordertypes", {})
        return section if isinstance(section, dict) else {}
    return data
