import logging
import sys
from typing import Any

import structlog


def configure_logging(level: int | str = logging.WARNING, *, json_logs: bool = True) -> None:
    """Configure structlog/standard logging bridge.

    Logs go to stderr; stdout is reserved for command output.
    """

    if isinstance(level, str):
        level = level.upper()

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)


def bind_context(**kwargs: Any) -> structlog.stdlib.BoundLogger:
    """Bind contextual fields, such as the environment of a pass, for downstream logs."""

    logger = structlog.get_logger()
    return logger.bind(**kwargs)
