"""Logging configuration for the ldprofiles command line."""

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "ldprofiles"
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Third-party loggers held at WARNING whatever level the CLI asks for
QUIET_LOGGERS = ('jsonschema', 'bs4')


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """Attach handlers to the ldprofiles package logger.

    Records go to stderr so JSON the CLI prints on stdout stays parseable.
    Calling again replaces the handlers installed by the previous call.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown
            names fall back to INFO
        log_file: Optional log file path; parent directories are created
        format_string: Optional custom format string

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
