"""Logging configuration for the holybible command line.

Library modules only create ``logging.getLogger(__name__)`` loggers; this
module is what an application calls to route them to stderr and,
optionally, a log file.
"""

import logging
import sys
from typing import Optional, Union

DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# HTTP plumbing that logs every connection at DEBUG
NOISY_LOGGERS = ("urllib3",)


def resolve_level(level: Union[int, str]) -> int:
    """Maps 'debug'/'INFO'/20 style values to a logging level, defaulting to WARNING."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else DEFAULT_LOG_LEVEL


def _make_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_level: Union[int, str] = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = None
) -> None:
    """Replaces the root logger's handlers with a stderr handler and an optional file handler.

    Args:
        log_level: Minimum level, as a number or a name such as 'info'.
        log_format: Format string shared by all handlers.
        log_file: Path of a file that also receives log records.
    """
    level = resolve_level(log_level)
    formatter = logging.Formatter(log_format)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)

    # stderr keeps log lines out of command output
    root_logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr), level, formatter))

    if log_file:
        try:
            root_logger.addHandler(
                _make_handler(logging.FileHandler(log_file, encoding='utf-8'), level, formatter)
            )
        except OSError as e:
            root_logger.error(f"Cannot write log file {log_file}: {e}")

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    root_logger.debug(f"Logging configured at {logging.getLevelName(level)}")
