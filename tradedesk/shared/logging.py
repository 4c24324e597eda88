"""
Logging configuration for the application.

One stdout handler with a pipe-separated format. Third-party loggers are
pinned to their own levels so request and SQL chatter stays out of the
application log unless asked for.
Never logs sensitive data (passwords, hashes, tokens, request bodies).
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

THIRD_PARTY_LEVELS = {
    "uvicorn.access": logging.WARNING,
    "uvicorn.error": logging.WARNING,
    "passlib": logging.ERROR,
    "httpx": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
}


def configure_logging(level: str = "INFO", debug: bool = False) -> None:
    """Configure application logging.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
        debug: Also log SQL statements from ``sqlalchemy.engine``.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    for name, third_party_level in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(third_party_level)
    if debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
