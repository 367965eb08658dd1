"""Project-level configuration from pyproject.toml.

Reads the [tool.genregraph] section to provide CLI defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


@dataclass(frozen=True)
class GenreGraphConfig:
    """Configuration from [tool.genregraph] in pyproject.toml."""

    data: str = "data.json"
    base_size: float = 4.0
    port: int = 8080


def find_pyproject(start: Optional[Path] = None) -> Optional[Path]:
    """Walk up from start directory to find pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_config(start: Optional[Path] = None) -> GenreGraphConfig:
    """Load [tool.genregraph] from the nearest pyproject.toml.

    Returns default config if no pyproject.toml or no [tool.genregraph] section.
    """
    path = find_pyproject(start)
    if path is None:
        return GenreGraphConfig()

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("tool", {}).get("genregraph", {})
    if not section:
        return GenreGraphConfig()

    defaults = GenreGraphConfig()
    return GenreGraphConfig(
        data=str(section.get("data", defaults.data)),
        base_size=float(section.get("base_size", defaults.base_size)),
        port=int(section.get("port", defaults.port)),
    )
