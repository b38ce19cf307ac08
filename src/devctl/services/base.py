"""BaseService — foundation for devctl services.

Every service receives a :class:`ConfigStore` at construction time
instead of reaching for a global config.  Tests pass a store pointed at
a temporary file.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from devctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from devctl.domain.errors import ConfigError
    from devctl.infrastructure.store import ConfigStore

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes operating on the loaded config.

    Usage::

        class PortService(BaseService):
            def add_port(self, ...) -> ServiceResult:
                config = self._store.get_base_config()
                ...
                self._store.save_loaded_config()
    """

    def __init__(self, store: ConfigStore) -> None:
        self._store = store

    @staticmethod
    def _fail(op: str, exc: ConfigError, *, prefix: str = "") -> ServiceResult:
        """Convert a domain exception into a failed result."""
        logger.debug("%s failed: %s (%s)", op, exc.message, exc.code)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError.from_exception(exc, prefix=prefix),
        )
