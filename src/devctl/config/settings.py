"""Unified settings — CLI flags, env vars, and code defaults in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``DEVCTL_*`` prefix
  3. Code defaults

The project's ``devctl.yaml`` is *data* edited by commands, not a
settings source; settings only decide where that file lives and how
results are printed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from devctl.config.discovery import resolve_config_path


class DevSettings(BaseSettings):
    """Settings for one devctl invocation, frozen after construction.

    Stored on the :class:`~devctl.commands._context.AppContext` created
    by the root CLI group.

    Attributes:
        project_root: Directory the config file belongs to.
        config_path: Resolved path of ``devctl.yaml`` (may not exist yet).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DEVCTL_",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Only init kwargs and env vars; no dotenv or secrets files."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> DevSettings:
        """Construct settings from a CLI invocation.

        Resolves the config file (explicit path, env var, or walk-up
        discovery) and derives *project_root* from its parent when not
        given.
        """
        resolved = resolve_config_path(config_path, project_root=project_root)
        root = project_root if project_root is not None else resolved.parent
        return cls(project_root=root, config_path=resolved, **cli_flags)
