"""Logging configuration for the application.

Every record carries the request id and acting profile of the request that
emitted it ("-" outside a request), so a status change or a policy denial in
the log can be traced back to the X-Request-ID returned to the client.
"""

import logging
import sys

from taskdesk.core.config import get_settings
from taskdesk.shared.context import get_request_context

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[request=%(request_id)s actor=%(actor_id)s] %(message)s"
)


class RequestContextFilter(logging.Filter):
    """Stamp request_id and actor_id from the current request context onto records."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_request_context()
        record.request_id = context.request_id or "-"
        record.actor_id = context.actor_id or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO. SQL echo
    stays at WARNING unless database_echo is set. Output goes to stdout.
    """
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)
