"""Logger setup for the Jira REST client."""

import logging
import os

from .config import JiraConfig

LOGGER_NAME = "jira-rest-client"

_LEVELS = {
    "EMERGENCY": logging.CRITICAL,
    "ALERT": logging.CRITICAL,
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "NOTICE": logging.INFO,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def convert_log_level(log_level: str) -> int:
    """Map a level name to a logging level. Unknown names map to WARNING."""
    return _LEVELS.get(log_level.upper(), logging.WARNING)


def create_logger(config: JiraConfig, logger: logging.Logger | None = None) -> logging.Logger:
    """Return the logger a client should write to.

    Args:
        config: Client configuration (log_enabled, log_file, log_level)
        logger: Caller-supplied logger, used as-is when logging is enabled

    Returns:
        The injected logger, the library logger (with a file handler when
        log_file is set), or a silent logger when logging is disabled.
    """
    if not config.log_enabled:
        silent = logging.getLogger(f"{LOGGER_NAME}.disabled")
        if not silent.handlers:
            silent.addHandler(logging.NullHandler())
        silent.propagate = False
        return silent

    if logger is not None:
        return logger

    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(convert_log_level(config.log_level))

    if config.log_file:
        already_attached = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(config.log_file)
            for h in log.handlers
        )
        if not already_attached:
            handler = logging.FileHandler(config.log_file, encoding="utf-8")
            handler.setFormatter(
                logging.Formatter("[%(asctime)s] %(name)s.%(levelname)s: %(message)s")
            )
            log.addHandler(handler)

    return log
