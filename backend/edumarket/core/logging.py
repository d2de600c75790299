# edumarket/core/logging.py
import logging
import os
from logging.handlers import RotatingFileHandler

from edumarket.core.config import Settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"


def setup_logging(settings: Settings) -> logging.Logger:
    logger = logging.getLogger("edumarket")
    logger.setLevel(settings.LOG_LEVEL.upper())

    # create_app may run more than once per process (tests, reloads)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if settings.LOG_DIR:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        log_file = os.path.join(settings.LOG_DIR, "edumarket.log")
        file_handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
