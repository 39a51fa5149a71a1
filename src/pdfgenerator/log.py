"""Logging setup for applications embedding the generator."""

import logging
import sys

from pdfgenerator.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """
    Configure root logging (WARNING, stdout) and the pdfgenerator level.

    Root configuration is left alone if the application already did it.

    Args:
        level: Level for the pdfgenerator loggers. Defaults to settings.log_level.

    Returns:
        The package logger.
    """
    logging.basicConfig(
        level=logging.WARNING,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )
    if level is None:
        level = settings.log_level
    if isinstance(level, str):
        level = level.upper()

    package_logger = logging.getLogger("pdfgenerator")
    package_logger.setLevel(level)
    return package_logger
