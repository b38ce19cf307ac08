"""Domain exceptions for configuration edits.

Raised by the pure domain layer and the config store.  The service layer
catches :class:`ConfigError` and converts it to a failed ServiceResult
using the ``code`` attribute, so nothing above services sees a raise for
an expected failure.
"""

from __future__ import annotations

from typing import Any


class ConfigError(Exception):
    """Base class for every failure raised while editing the config."""

    code = "CONFIG_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(ConfigError):
    """Conflicting or missing inputs, detected before any mutation."""

    code = "VALIDATION"


class ParseError(ConfigError):
    """Malformed selector token, port mapping segment, or port number."""

    code = "PARSE_ERROR"


class NotFoundError(ConfigError):
    """A named entry (e.g. a selector) is not present in the config."""

    code = "NOT_FOUND"


class PersistenceError(ConfigError):
    """Reading or writing the config file failed."""

    code = "SAVE_FAILED"
