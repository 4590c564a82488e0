"""Structlog configuration for the application.

Configures structlog with colored console output for development
and JSON output for production. Records from standard-library loggers
(uvicorn, SQLAlchemy) are rendered by the same processors so one stream
carries every event.
"""

import logging
import os
import sys

import structlog

SQL_LOGGER = "sqlalchemy.engine"


def configure_logging(debug: bool = False, sql_echo: bool = False) -> None:
    """Configure structlog and route stdlib logging through it.

    Uses colored console output for development (when FORCE_COLOR is set
    or running in a TTY), otherwise uses JSON output for production.

    Args:
        debug: Emit debug-level events (probe chatter such as per-read logs)
        sql_echo: Log every SQL statement issued by the engine
    """
    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    use_colors = force_color or sys.stdout.isatty()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: structlog.types.Processor
    if use_colors:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()

    min_level = logging.DEBUG if debug else logging.INFO

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
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

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(min_level)

    # SQLAlchemy logs statements at INFO on this logger
    logging.getLogger(SQL_LOGGER).setLevel(
        logging.INFO if sql_echo else logging.WARNING
    )
