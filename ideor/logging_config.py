"""
Logging setup for the API process.

Log lines carry the id of the HTTP request being served (or "-" outside
of a request) so a request can be followed across modules.
"""

import contextvars
import logging
import sys
from typing import Optional

from ideor.config import LOG_LEVEL

request_id_var: contextvars.ContextVar = contextvars.ContextVar("request_id", default="-")

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] [%(request_id)s] %(message)s"


class RequestIdFilter(logging.Filter):
    """Attach the current request id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger once with a stderr handler.

    Args:
        level: Level name; defaults to IDEOR_LOG_LEVEL

    Returns:
        The root logger
    """
    root = logging.getLogger()
    root.setLevel((level or LOG_LEVEL).upper())

    # Avoid duplicate handlers on reload
    if any(getattr(h, "_ideor_handler", False) for h in root.handlers):
        return root

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.addFilter(RequestIdFilter())
    handler._ideor_handler = True
    root.addHandler(handler)
    return root
