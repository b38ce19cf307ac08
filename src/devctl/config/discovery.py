"""Locate the project's devctl.yaml.

Precedence: explicit ``--config`` path, then the DEVCTL_CONFIG env var,
then a walk-up search from the working directory (like git and .git/).
When nothing exists yet, the file is created in the project root on the
first save.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "devctl.yaml"
CONFIG_ENV_VAR = "DEVCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest existing devctl.yaml at or above *start*."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config_path(
    explicit: str | Path | None = None,
    *,
    project_root: Path | None = None,
) -> Path:
    """Pick the config file an invocation reads and writes.

    Explicit and env-var paths are returned even when the file does not
    exist yet, since saving creates it.
    """
    if explicit:
        return Path(explicit)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    found = find_config(project_root)
    if found is not None:
        return found
    return (project_root or Path.cwd()) / CONFIG_FILENAME
