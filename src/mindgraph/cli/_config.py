"""Project-level configuration from pyproject.toml.

Reads the [tool.mindgraph] section to provide default rendering options
for the CLI:

    [tool.mindgraph]
    preset = "colorful"
    width = 1200
    height = 800

    [tool.mindgraph.options]
    collapse_depth = 3
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600


@dataclass(frozen=True)
class ProjectConfig:
    """Configuration from [tool.mindgraph] in pyproject.toml."""

    preset: str | None = None
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    options: dict[str, Any] = field(default_factory=dict)


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from start directory to find pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def _read_toml(path: Path) -> dict[str, Any]:
    if sys.version_info >= (3, 11):
        import tomllib
    else:
        try:
            import tomli as tomllib
        except ImportError:
            return {}
    with path.open("rb") as f:
        return tomllib.load(f)


def load_config(start: Path | None = None) -> ProjectConfig:
    """Load [tool.mindgraph] from the nearest pyproject.toml.

    Returns the defaults when there is nothing to read.
    """
    path = find_pyproject(start)
    section = _read_toml(path).get("tool", {}).get("mindgraph", {}) if path else {}
    if not section:
        return ProjectConfig()

    return ProjectConfig(
        preset=section.get("preset"),
        width=float(section.get("width", DEFAULT_WIDTH)),
        height=float(section.get("height", DEFAULT_HEIGHT)),
        options=dict(section.get("options", {})),
    )
