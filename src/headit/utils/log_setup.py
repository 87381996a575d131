"""Logging setup for the CLI and console."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 1


def setup_logging(log_file: Path | None = None, debug: bool = False) -> logging.Logger:
    """
    Configure the ``headit`` logger.

    Warnings go to stderr (everything with ``debug``); the log file, when given,
    receives INFO and above (DEBUG with ``debug``) and rotates at 10 MB.
    Calling it again replaces the handlers installed by an earlier call.
    """
    logger = logging.getLogger("headit")
    for handler in list(logger.handlers):
        if getattr(handler, "_headit_handler", False):
            logger.removeHandler(handler)
            handler.close()

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    fmt = logging.Formatter(DEBUG_LOG_FORMAT if debug else LOG_FORMAT, DATE_FORMAT)

    stream = logging.StreamHandler(sys.stderr)
    stream.setLevel(logging.DEBUG if debug else logging.WARNING)
    stream.setFormatter(fmt)
    stream._headit_handler = True
    logger.addHandler(stream)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        except OSError as exc:
            logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(logging.DEBUG if debug else logging.INFO)
            file_handler.setFormatter(fmt)
            file_handler._headit_handler = True
            logger.addHandler(file_handler)

    return logger
