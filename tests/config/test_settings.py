"""Tests for DevSettings."""

from __future__ import annotations

from pathlib import Path

import pytest

from devctl.config.settings import DevSettings


class TestDevSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = DevSettings.from_cli(project_root=tmp_path, config_path=str(tmp_path / "d.yaml"))
        assert settings.project_root == tmp_path
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.log_json is False

    def test_frozen(self, tmp_path: Path) -> None:
        settings = DevSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestConfigPathResolution:
    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.yaml"
        settings = DevSettings.from_cli(config_path=str(custom))
        assert settings.config_path == custom
        assert settings.project_root == custom.parent

    def test_discovered_from_project_root(self, tmp_path: Path) -> None:
        (tmp_path / "devctl.yaml").write_text("")
        sub = tmp_path / "svc"
        sub.mkdir()
        settings = DevSettings.from_cli(project_root=sub)
        assert settings.config_path == (tmp_path / "devctl.yaml").resolve()
        assert settings.project_root == sub


class TestCliFlagsAndEnv:
    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = DevSettings.from_cli(project_root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEVCTL_QUIET", "true")
        settings = DevSettings.from_cli(project_root=tmp_path)
        assert settings.quiet is True

    def test_cli_flag_beats_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEVCTL_QUIET", "true")
        settings = DevSettings.from_cli(project_root=tmp_path, quiet=False)
        assert settings.quiet is False
