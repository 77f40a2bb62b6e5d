"""Process-wide logging for sopflow: one stdout stream, level from settings."""

import logging
import sys

from sopflow.core.config import get_settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging() -> None:
    """Configure the root logger. Called once from create_app().

    DEBUG when settings.debug is on, INFO otherwise. The SQLAlchemy engine
    logger is held at WARNING unless database_echo asks for statements.
    """
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass __name__."""
    return logging.getLogger(name)
