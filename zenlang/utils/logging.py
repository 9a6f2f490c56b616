"""
Logging setup for ZenLang.

Library modules only create loggers; handlers are installed by the
command-line entry point through configure_logging().
"""

import logging
import sys

ROOT_LOGGER = "zenlang"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
