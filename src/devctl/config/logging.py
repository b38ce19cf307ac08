"""structlog configuration for devctl.

Everything goes to stderr so stdout stays clean for command results:
- Human (default): console renderer, colored on a TTY
- JSON (--log-json): one JSON object per line

Every record carries the invocation context bound by
:func:`bind_invocation` (the config file being edited, the command).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog and route stdlib ``logging`` through it.

    Args:
        verbose: DEBUG for the ``devctl`` logger tree. When False, only WARNING+.
        log_json: JSON lines instead of the console renderer.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
        final_processors = [structlog.processors.format_exc_info, renderer]
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        final_processors = [renderer]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *final_processors,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("devctl").setLevel(logging.DEBUG if verbose else logging.WARNING)


def bind_invocation(**values: Any) -> None:
    """Attach key/values to every log record for the rest of the process."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**values)
