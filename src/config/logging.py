"""
Logging configuration.

Installs a single stdout handler on the root logger with a structured
text format. The level comes from the LOG_LEVEL setting.
"""

import logging
import sys

# Marks the handler installed here so repeated calls replace only our own
_HANDLER_MARK = "_registration_handler"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the application.

    Safe to call more than once: the previously installed handler is
    replaced, handlers added by others (e.g. pytest) are left alone.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_MARK, True)

    root = logging.getLogger()
    root.setLevel(log_level)
    for existing in [h for h in root.handlers if getattr(h, _HANDLER_MARK, False)]:
        root.removeHandler(existing)
    root.addHandler(handler)

    # psycopg_pool logs every connection checkout at DEBUG
    logging.getLogger("psycopg.pool").setLevel(logging.WARNING)
