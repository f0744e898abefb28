"""
Logging configuration for Retryloop.

Library code only creates ``retryloop.*`` loggers; handlers are attached by
the application through :func:`setup_logging` or
:func:`setup_logging_from_config`.
"""

import logging
import sys
import traceback
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "retryloop"


class FileFormatter(logging.Formatter):
    """Formatter for file logs - clean and parseable."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    def formatException(self, ei: Any) -> str:
        """Full traceback, including chained causes."""
        return "".join(traceback.format_exception(*ei)).rstrip("\n")


class ConsoleFormatter(logging.Formatter):
    """Plain console format: ``level: timestamp - msg``, with file:line for errors."""

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        base = f"{record.levelname}: {self.formatTime(record)} - {record.getMessage()}"
        if record.levelno >= logging.ERROR and record.pathname:
            base = f"{record.levelname}: {self.formatTime(record)} - {Path(record.pathname).name}:{record.lineno} - {record.getMessage()}"
        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)
        return base


# Map string level names to logging constants
LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(level: str | int) -> int:
    """
    Parse logging level from string or int.

    Args:
        level: Logging level as string (DEBUG, INFO, etc.) or int

    Returns:
        Logging level constant (INFO if the name is unknown)
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level_upper = level.upper()
        if level_upper in LEVEL_MAP:
            return LEVEL_MAP[level_upper]
    return logging.INFO


def setup_logging(
    level: str | int = logging.INFO,
    log_file: str | Path | None = None,
    format_string: str | None = None,
    file_mode: str = "a",
    console: Console | None = None,
    console_enabled: bool = True,
    use_rich: bool = True,
) -> logging.Logger:
    """
    Setup logging configuration for Retryloop.

    Args:
        level: Logging level as string (DEBUG, INFO, etc.) or int (default: INFO)
        log_file: Optional file path to write logs to (default: None, console only)
        format_string: Optional custom format string for the plain console handler
        file_mode: File mode for file handler - 'a' for append, 'w' for overwrite
        console: Optional Rich Console instance to log to
        console_enabled: Whether to enable console logging (default: True)
        use_rich: Whether to render console logs with RichHandler (default: True)

    Returns:
        The ``retryloop`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    # Only clear handlers from this logger, never the root logger's
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level_int = _parse_level(level)
    logger.setLevel(level_int)

    if console_enabled:
        if use_rich and format_string is None:
            console_handler: logging.Handler = RichHandler(
                level=level_int,
                console=console or Console(stderr=True),
                show_time=True,
                show_path=True,
                markup=False,
                rich_tracebacks=True,
                tracebacks_show_locals=False,
                log_time_format="[%X]",
                omit_repeated_times=False,
            )
        else:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level_int)
            console_handler.setFormatter(
                logging.Formatter(format_string) if format_string is not None else ConsoleFormatter()
            )
        logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode=file_mode)
        # File captures everything; the logger level still filters
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FileFormatter())
        logger.addHandler(file_handler)

    logger.propagate = True
    return logger


def setup_logging_from_config(config: dict[str, Any], project_dir: Path | None = None) -> logging.Logger:
    """
    Setup logging from a configuration mapping.

    Reads the ``logging`` section when present, otherwise the mapping itself::

        logging:
          level: DEBUG
          file: logs/retryloop.log
          console_type: rich   # or "plain"

    Args:
        config: Configuration dictionary
        project_dir: Optional directory for resolving a relative log file path

    Returns:
        The ``retryloop`` logger
    """
    logging_config = config.get("logging") or config

    level = logging_config.get("level", logging.INFO)
    file_mode = logging_config.get("file_mode", "a")
    format_string = logging_config.get("format")
    console_enabled = logging_config.get("console_enabled", True)
    console_type = logging_config.get("console_type", "rich")

    log_file = logging_config.get("file") or logging_config.get("log_file")
    if log_file and project_dir:
        log_file = Path(log_file)
        if not log_file.is_absolute():
            log_file = project_dir / log_file

    return setup_logging(
        level=level,
        log_file=log_file,
        format_string=format_string,
        file_mode=file_mode,
        console_enabled=console_enabled,
        use_rich=console_type == "rich",
    )


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (default: "retryloop")

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    # Child loggers propagate to the "retryloop" handlers
    logger.propagate = True
    return logger
