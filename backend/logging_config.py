"""Centralized logging configuration."""

import logging
from typing import Optional

from config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure logging for the command-line entry points.

    Args:
        level: Level name overriding ``settings.LOG_LEVEL`` (the scripts
            pass ``"DEBUG"`` for ``--verbose``)

    SQLAlchemy's engine logger is pinned to WARNING unless ``SQL_ECHO`` is
    on, in which case statements are logged at INFO with our own records.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        level=getattr(logging, level_name),
        force=True,
    )

    engine_level = logging.INFO if settings.SQL_ECHO else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(engine_level)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
