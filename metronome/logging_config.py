"""
Logging setup for Metronome.

All modules log through children of the "metronome" logger obtained with
get_logger(__name__). Hosts embedding the triggers can leave logging alone
and configure the "metronome" logger themselves; the daemon and CLI call
setup_logging() once at startup.
"""

import logging
import logging.handlers
import sys

PACKAGE_LOGGER = "metronome"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB default
    backup_count: int = 5
) -> logging.Logger:
    """
    Send Metronome log records to stdout and optionally a rotating file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names fall back to INFO
        log_file: Optional path of a log file
        max_bytes: Size at which the log file is rotated (default: 10MB)
        backup_count: Number of rotated files to keep (default: 5)

    Returns:
        The configured package logger
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        ))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    # Records stop here instead of reaching the host's root handlers
    package_logger.propagate = False
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get the logger of a Metronome module.

    Args:
        name: Module name (typically __name__), with or without the
            "metronome." prefix

    Returns:
        Logger named "metronome.<module>"
    """
    name = name.removeprefix(f"{PACKAGE_LOGGER}.")
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
