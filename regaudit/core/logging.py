"""Structlog configuration for regaudit.

Both stdlib ``logging`` records and structlog events are rendered by the same
``ProcessorFormatter``: JSON lines for production, a rich console for local
development.
"""

import logging
import sys
from typing import Any

import structlog
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from regaudit.config.logging import LoggingSettings


CUSTOM_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "critical": "bold white on red",
        "debug": "dim white",
        "timestamp": "dim cyan",
        "path": "dim blue",
    }
)

# Noisy third-party loggers kept at WARNING
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def setup_logging(
    json_logs: bool = False,
    log_level_name: str = "INFO",
    console_width: int | None = None,
) -> structlog.stdlib.BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        json_logs: Render JSON lines instead of the rich console output
        log_level_name: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_width: Optional console width override for rich output

    Returns:
        Logger bound to this module
    """
    level = getattr(logging, log_level_name.upper(), logging.INFO)
    shared = _shared_processors()

    structlog.configure(
        processors=[
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler: logging.Handler
    if json_logs:
        renderer: Any = structlog.processors.JSONRenderer()
        handler = logging.StreamHandler(sys.stdout)
        final_processors = [structlog.processors.format_exc_info, renderer]
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
        handler = RichHandler(
            console=Console(theme=CUSTOM_THEME, width=console_width, stderr=True),
            show_time=False,
            show_level=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        final_processors = [renderer]

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *final_processors,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return get_logger(__name__)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to ``name`` (typically ``__name__``)."""
    return structlog.stdlib.get_logger(name)


def configure_logging(settings: LoggingSettings) -> structlog.stdlib.BoundLogger:
    """Configure logging from the ``logging`` section of the settings."""
    return setup_logging(
        json_logs=settings.json_logs,
        log_level_name=settings.level,
        console_width=settings.console_width,
    )
