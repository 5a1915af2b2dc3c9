import logging
import sys
from enum import StrEnum, unique
from typing import Final

__all__ = "LogActions", "configure_logging"


_PACKAGE_LOGGER_NAME: Final = __name__.rpartition(".")[0]

_LOG_FORMAT: Final = "%(message)s"


@unique
class LogActions(StrEnum):
    DRY_RUN = "[DRY RUN]"

    STARTED = "STARTED"
    FINISHED = "FINISHED"
    SUMMARY = "SUMMARY"

    CREATED = "CREATED"
    COPIED = "Copied"
    RENAMED = "RENAMED"
    REPLACED = "REPLACED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


def _below_warning(record: logging.LogRecord) -> bool:
    return record.levelno < logging.WARNING


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Route the package's log records to the terminal.

    Records below WARNING go to stdout and everything else to stderr, both as
    bare messages. Handlers installed by a previous call are replaced.

    Args:
        verbose: If `True`, DEBUG records are emitted as well.

    Returns:
        The package logger.
    """

    logger = logging.getLogger(_PACKAGE_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in [h for h in logger.handlers if _is_ours(h)]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(_LOG_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_below_warning)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)

    for handler in stdout_handler, stderr_handler:
        handler.setFormatter(formatter)
        handler.set_name(_PACKAGE_LOGGER_NAME)
        logger.addHandler(handler)

    return logger


def _is_ours(handler: logging.Handler) -> bool:
    return handler.get_name() == _PACKAGE_LOGGER_NAME
