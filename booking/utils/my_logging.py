# booking/utils/my_logging.py
"""Logging configuration"""
import logging
import sys
from typing import Optional

from booking.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that drown the booking logs at INFO
NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "sqlalchemy.orm",
    "passlib",
    "httpx",
    "uvicorn.access",
)


def setup_logging(verbose: bool = True, level: Optional[str] = None):
    """
    Configure root logging to stdout.

    `level` overrides LOG_LEVEL. When not verbose only warnings are shown and
    third-party chatter is limited to errors.
    """
    settings = get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()

    if verbose:
        root_level = getattr(logging, level_name, logging.INFO)
    else:
        root_level = logging.WARNING

    logging.basicConfig(
        level=root_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    noisy_level = logging.WARNING if verbose else logging.ERROR
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    logging.getLogger("booking").setLevel(root_level)
