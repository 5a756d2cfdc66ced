import logging
from logging import Logger
from logging.handlers import RotatingFileHandler

from .config import LOG_FILE, LOG_LEVEL


def setupLogger(name: str, log_file: str = LOG_FILE, level: str = LOG_LEVEL) -> Logger:
    """
    Set up a logger with a rotating file handler. The file is only created
    once the first record is emitted.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = RotatingFileHandler(log_file, maxBytes=2 * 1024 * 1024, backupCount=2,
                                      encoding="utf-8", delay=True)
        formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(name)s | %(message)s', datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
