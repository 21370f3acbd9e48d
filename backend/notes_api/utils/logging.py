from __future__ import annotations

import logging
import sys

from notes_api.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class ContextFormatter(logging.Formatter):
    """Standard line format with ``extra=`` fields appended as ``key=value``.

    Store failures are logged with ``operation``, ``owner_id`` and ``note_id``
    passed as extras; the default formatter would drop them.
    """

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if not context:
            return line
        return line + " | " + " ".join(f"{k}={v!r}" for k, v in sorted(context.items()))


def setup_logging() -> None:
    """Route application logs to stdout through ``ContextFormatter``."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    for name in ("uvicorn", "uvicorn.access", "fastapi"):
        logging.getLogger(name).setLevel(logging.INFO)

    # supabase-py logs every PostgREST round trip through httpx
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured", extra={"level": settings.log_level})


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
