import logging
from ..core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(level=level, format=LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
