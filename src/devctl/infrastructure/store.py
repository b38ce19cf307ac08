"""ConfigStore — lazy load and atomic save of ``devctl.yaml``.

One store per CLI invocation.  ``get_base_config()`` loads the file on
first use and hands out the same mutable :class:`Config` on every call;
services edit it in place and call ``save_loaded_config()`` once on the
success path.
"""

from __future__ import annotations

import logging
import os
import tempfile
from io import StringIO
from pathlib import Path
from typing import Any

import pydantic
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from devctl.config.models import Config
from devctl.domain.errors import ConfigError, PersistenceError

logger = logging.getLogger(__name__)


def _new_yaml() -> YAML:
    """Fresh round-trip YAML instance (ruamel's YAML object is stateful)."""
    y = YAML()
    y.default_flow_style = False
    y.indent(mapping=2, sequence=4, offset=2)
    return y


def parse_config(text: str, *, source: str = "<string>") -> Config:
    """Parse and validate YAML text into a :class:`Config`.

    Raises:
        ConfigError: On invalid YAML, a non-mapping document, or a
            schema violation.
    """
    try:
        data: Any = _new_yaml().load(text)
    except YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source}: {exc}", path=source) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source} must contain a YAML mapping", path=source)

    try:
        return Config.model_validate(data)
    except pydantic.ValidationError as exc:
        errors = [
            f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in exc.errors()
        ]
        raise ConfigError(
            f"Invalid configuration in {source}: {'; '.join(errors)}",
            path=source,
            errors=errors,
        ) from exc


def render_config(config: Config) -> str:
    """Serialize a :class:`Config` to YAML with on-disk key names."""
    data = config.model_dump(by_alias=True, exclude_none=True, mode="json")
    buf = StringIO()
    _new_yaml().dump(data, buf)
    return buf.getvalue()


class ConfigStore:
    """File-backed holder of the process-wide :class:`Config`."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._config: Config | None = None

    @property
    def loaded(self) -> bool:
        return self._config is not None

    def get_base_config(self) -> Config:
        """Return the loaded config, reading the file on first access.

        A missing file yields a default config; it is created on save.
        """
        if self._config is None:
            self._config = self._load()
        return self._config

    def save_loaded_config(self) -> None:
        """Atomically write the loaded config back to :attr:`path`.

        Raises:
            PersistenceError: If nothing was loaded or the write fails.
        """
        if self._config is None:
            raise PersistenceError("Config has not been loaded", path=str(self.path))

        rendered = render_config(self._config)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(rendered)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(str(exc), path=str(self.path)) from exc

        logger.debug("Saved config to %s", self.path)

    def _load(self) -> Config:
        if not self.path.is_file():
            logger.debug("No config at %s, using defaults", self.path)
            return Config()

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to read {self.path}: {exc}", path=str(self.path)) from exc

        logger.debug("Loaded config from %s", self.path)
        return parse_config(raw, source=str(self.path))
