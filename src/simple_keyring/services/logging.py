"""
Logging - Keyring logging configuration.

Every module logs through logging.getLogger(__name__). Hosts that do not
configure logging themselves can call configure_logging() once at startup.
"""

import logging


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure Python logging with console output.

    Does nothing if the root logger already has handlers.

    Args:
        level: Logging level (default: INFO)
    """
    root_logger = logging.getLogger()

    if root_logger.handlers:
        return

    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(console_handler)
