"""Diagnostics logging with structlog.

Log events go to a file only; console output is reserved for messages meant
for the user.

Usage:
    import structlog
    logger = structlog.get_logger(__name__)
    logger.error("invalid_amount", line=3, value="abc")
"""

import logging
from pathlib import Path

import structlog

LOGGER_NAME = "supportbank"
DEFAULT_LOG_FILE = "logs/debug.log"


def setup_logging(
    log_file: str = DEFAULT_LOG_FILE,
    log_level: str = "DEBUG",
    json_output: bool = False,
) -> None:
    """Configure structured diagnostics logging.

    Args:
        log_file: Path of the log file; parent directories are created.
        log_level: Python log level string (DEBUG, INFO, WARNING, ERROR).
        json_output: If True, write JSON lines. Otherwise use key=value lines.
    """
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"]))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)
        old_handler.close()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, log_level.upper(), logging.DEBUG))
    logger.propagate = False
