"""Shared pytest fixtures and test helpers for devctl tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from devctl.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME
from devctl.infrastructure.store import ConfigStore

SAMPLE_CONFIG = """\
version: v1beta1
deployments:
  - name: web-app
    helm:
      chart:
        name: ./chart
dev:
  selectors:
    - name: default
      labelSelector:
        app: web
    - name: database
      labelSelector:
        app: postgres
        tier: data
  ports:
    - labelSelector:
        app: web
      portMappings:
        - localPort: 8080
          remotePort: 80
"""


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's DEVCTL_CONFIG from leaking into tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project directory (no devctl.yaml yet)."""
    return tmp_path


@pytest.fixture
def config_file(project_root: Path) -> Path:
    """Project directory with the sample devctl.yaml written."""
    path = project_root / CONFIG_FILENAME
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path


@pytest.fixture
def store(config_file: Path) -> ConfigStore:
    """ConfigStore over the sample config."""
    return ConfigStore(config_file)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp project so the CLI finds (or creates) its devctl.yaml there.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``.
    """
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_config(root: Path, text: str) -> Path:
    """Write *text* as the project's devctl.yaml and return its path."""
    path = root / CONFIG_FILENAME
    path.write_text(text, encoding="utf-8")
    return path
