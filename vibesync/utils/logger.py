"""
Custom logger module that supports ANSI color codes.
"""

import logging
from typing import TYPE_CHECKING, Optional

import sentry_sdk
from sentry_sdk.integrations.logging import EventHandler

from .constants import RELEASE

if TYPE_CHECKING:
    from vibesync.dataclass.config import Config

# Log line format
LOG_FMT_STR = '{0}%(asctime)s.%(msecs)03d {1}[%(levelname)s]{2} %(message)s (%(filename)s:%(lineno)d)' # pylint: disable=line-too-long
DATE_FMT_STR = '%Y-%m-%d %H:%M:%S'

# ANSI terminal colors (for logging)
ANSI_BLUE = '\x1b[36;20m'
ANSI_GREEN = '\x1b[32;20m'
ANSI_GREY = '\x1b[37;1m'
ANSI_RED = '\x1b[31;20m'
ANSI_RED_BOLD = '\x1b[41;1m'
ANSI_YELLOW = '\x1b[33;20m'
ANSI_RESET = '\x1b[0m'
LOG_FMT_COLOR = {
    logging.DEBUG: LOG_FMT_STR.format(ANSI_GREY, ANSI_GREEN, ANSI_RESET),
    logging.INFO: LOG_FMT_STR.format(ANSI_GREY, ANSI_BLUE, ANSI_RESET),
    logging.WARNING: LOG_FMT_STR.format(ANSI_GREY, ANSI_YELLOW, ANSI_RESET),
    logging.ERROR: LOG_FMT_STR.format(ANSI_GREY, ANSI_RED, ANSI_RESET),
    logging.CRITICAL: LOG_FMT_STR.format(ANSI_RED_BOLD, ANSI_RED_BOLD, ANSI_RESET),
}

_SENTRY_ENABLED = False


def init_sentry(config: 'Config') -> bool:
    """
    Initialize Sentry if a DSN and environment are configured.

    :return: Whether Sentry was initialized
    """
    global _SENTRY_ENABLED  # pylint: disable=global-statement
    if config.sentry_dsn is None or config.sentry_env is None:
        return False

    sentry_sdk.init(
        dsn=config.sentry_dsn,
        environment=config.sentry_env,
        release=RELEASE,
        traces_sample_rate=1.0
    )
    _SENTRY_ENABLED = True
    return True


class ColorFormatter(logging.Formatter):
    """
    Custom logging formatter that supports ANSI color codes.

    Adapted from https://stackoverflow.com/a/384125
    """
    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None):
        logging.Formatter.__init__(self, fmt, datefmt)

    def format(self, record: logging.LogRecord):
        log_fmt = LOG_FMT_COLOR.get(record.levelno)
        formatter = logging.Formatter(fmt=log_fmt, datefmt=DATE_FMT_STR)
        return formatter.format(record)


def create_logger(name: str, debug: bool = False) -> logging.Logger:
    """
    Creates a logger with the given name and returns it.

    :param name: Name of the logger
    :param debug: Whether to log debug messages
    :return: Logger object
    """
    logger = logging.getLogger(name)
    if logger.hasHandlers():
        logger.handlers.clear()

    # Set level
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)

    # Set level names
    logging.addLevelName(logging.DEBUG, 'DBUG')
    logging.addLevelName(logging.INFO, 'INFO')
    logging.addLevelName(logging.WARNING, 'WARN')
    logging.addLevelName(logging.ERROR, 'ERR!')
    logging.addLevelName(logging.CRITICAL, 'CRIT')

    # Add color formatter
    color_handler = logging.StreamHandler()
    color_handler.setFormatter(ColorFormatter())
    logger.addHandler(color_handler)

    # Add Sentry handler
    if _SENTRY_ENABLED:
        sentry_handler = EventHandler()
        sentry_handler.setLevel(logging.ERROR)
        logger.addHandler(sentry_handler)

    return logger
