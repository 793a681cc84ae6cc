"""Logging setup for applications embedding the library.

Library modules only create module-level loggers; handlers are configured
by the application, optionally through :func:`setup_logging`.
"""

import json
import logging
import sys
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """JSON structured log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def setup_logging(level: str = "INFO", json_output: bool = False) -> logging.Logger:
    """Configure the ``printforge`` logger hierarchy.

    Args:
        level: Log level name (e.g., "DEBUG")
        json_output: Emit one JSON object per line instead of plain text

    Returns:
        The configured ``printforge`` logger
    """
    logger = logging.getLogger("printforge")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] %(levelname)s: %(message)s")
        )

    logger.handlers = [handler]
    return logger
