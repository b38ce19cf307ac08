"""ServiceResult and ServiceError — what every service method returns.

Services never raise for expected failures (bad input, missing entries,
save errors).  They report them here, and the CLI decides how to print
the result and which exit code to use.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from devctl.domain.errors import ConfigError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: ConfigError, *, prefix: str = "") -> ServiceError:
        """Build an error payload from a domain exception."""
        return cls(code=exc.code, message=f"{prefix}{exc.message}", detail=dict(exc.detail))


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (e.g. ``"add_port"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
