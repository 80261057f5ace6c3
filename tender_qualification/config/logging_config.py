"""
Centralized logging configuration for the qualification engine.

The engine modules only create loggers with ``logging.getLogger(__name__)``.
Host applications call setup_logging() once at startup to attach handlers to
the package logger; nothing is configured on import.

Usage:
    from tender_qualification.config.logging_config import setup_logging
    setup_logging()  # Call once at startup
"""
import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "tender_qualification"

_logging_configured = False


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    propagate: bool = False,
) -> logging.Logger:
    """
    Configure handlers on the package logger.

    Subsequent calls are no-ops until reset_logging() is called.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional file path to write logs to
        format_string: Custom format string
        propagate: Whether records also reach the host's root logger

    Returns:
        The configured package logger
    """
    global _logging_configured

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _logging_configured:
        return package_logger

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = logging.Formatter(format_string)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    package_logger.setLevel(level)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
    for handler in handlers:
        package_logger.addHandler(handler)
    package_logger.propagate = propagate

    _logging_configured = True
    package_logger.debug("Logging configured for %s", PACKAGE_LOGGER)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the package namespace, configuring logging if needed.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if not _logging_configured:
        setup_logging()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def reset_logging() -> None:
    """
    Reset logging configuration. Primarily for testing purposes.
    """
    global _logging_configured
    _logging_configured = False

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
