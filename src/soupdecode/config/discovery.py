"""Config file discovery.

Resolution order for the TOML file:

1. ``--config PATH`` (must exist, otherwise a ClickException)
2. ``SOUPDECODE_CONFIG`` env var (ignored when it points nowhere)
3. ``soupdecode.toml`` found by walking up from the start directory
"""

from __future__ import annotations

import os
from pathlib import Path

import click

CONFIG_FILENAME = "soupdecode.toml"
CONFIG_ENV_VAR = "SOUPDECODE_CONFIG"


def walk_up(start: Path, filename: str = CONFIG_FILENAME) -> Path | None:
    """Return the first *filename* in *start* or any of its parents."""
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def find_config(start: Path | None = None, explicit: str | None = None) -> Path | None:
    """Locate the config file to load, or None to run on defaults.

    Raises:
        click.ClickException: If *explicit* was given but is not a file.
    """
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            msg = f"Config file not found: {explicit}"
            raise click.ClickException(msg)
        return path

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        return path if path.is_file() else None

    return walk_up(start or Path.cwd())
