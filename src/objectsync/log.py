"""Logging for objectsync: per-module loggers and optional setup.

Library modules log through get_logger(__name__): structlog bound loggers
that emit into a named stdlib logger, so nothing is printed until the host
application configures logging. Call setup_logging() once at startup to get
colored console output with objectsync's own level applied.
"""

import logging
import os

import structlog

LOG_LEVEL_ENV = "OBJECTSYNC_LOG_LEVEL"


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structlog logger backed by the stdlib logger *name*."""
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )


def _short_name_processor(
    _logger: structlog.typing.WrappedLogger,
    _method_name: str,
    event_dict: structlog.typing.EventDict,
) -> structlog.typing.EventDict:
    """Strip the 'objectsync.' prefix, cap at 20 chars."""
    name = event_dict.get("logger", "")
    if name.startswith("objectsync."):
        name = name[len("objectsync.") :]
    event_dict["short_name"] = name[:20]
    return event_dict


def resolve_level(log_level: str | None = None) -> int:
    """Explicit level > OBJECTSYNC_LOG_LEVEL > WARNING."""
    name = (log_level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    numeric_level = getattr(logging, name, None)
    if not isinstance(numeric_level, int):
        return logging.WARNING
    return numeric_level


def setup_logging(log_level: str | None = None) -> None:
    """Route structlog through stdlib logging with console rendering."""
    numeric_level = resolve_level(log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            _short_name_processor,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=True),
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            ],
        )
    )
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("objectsync").setLevel(numeric_level)
