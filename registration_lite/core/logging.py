"""
Structured logging configuration using structlog.
Outputs JSON in production, pretty-printed in development.
Operation context (name + short id) is bound by the busy gate.

The widget is a library living inside someone else's process, so setup only
ever touches the `registration_lite` logger tree. The host's root logger and
any structlog configuration the host made first are left as they are.
"""

import logging
import sys
from typing import Optional

import structlog
from registration_lite.core.config import get_settings

PACKAGE_LOGGER = "registration_lite"

_handler: Optional[logging.Handler] = None


def setup_logging() -> None:
    """
    Install the package handler. Called by every widget session; only the
    first call does anything.
    """
    global _handler
    if _handler is not None:
        return

    settings = get_settings()

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.ENVIRONMENT == "production":
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    if not structlog.is_configured():
        structlog.configure(
            processors=[
                *shared_processors,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    # Our handler already writes these; the host's root handlers would repeat them
    package_logger.propagate = False

    # httpx logs one line per request and api_client logs its own api_request event
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    _handler = handler


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
