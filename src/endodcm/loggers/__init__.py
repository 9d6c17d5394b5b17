import logging
import os
from contextlib import AbstractContextManager, contextmanager
from typing import Generator

import structlog
from tqdm.contrib.logging import logging_redirect_tqdm as _redirect_tqdm

from endodcm.loggers.logging_config import DEFAULT_LOG_LEVEL, LoggingManager

DEFAULT_OR_ENV = os.environ.get("ENDODCM_LOG_LEVEL", DEFAULT_LOG_LEVEL)


def get_logger(name: str, level: str = "INFO") -> structlog.stdlib.BoundLogger:
    """
    Retrieve a structlog logger configured at the given level.

    Parameters
    ----------
    name : str
        Name of Logger Instance
    level : str
        Desired logging level.

    Returns
    -------
    structlog.stdlib.BoundLogger
        Configured logger instance.
    """
    logging_manager = LoggingManager(name)
    env_level = logging_manager.env_level

    if env_level not in (level, DEFAULT_LOG_LEVEL):
        logging_manager.get_logger().warning(
            f"Environment variable {name.upper()}_LOG_LEVEL is {env_level} "
            f"but you are setting it to {level}"
        )
    return logging_manager.configure_logging(level=level)


@contextmanager
def temporary_log_level(
    level: str, logger_name: str = "endodcm"
) -> Generator[None, None, None]:
    """
    Temporarily change the level of a logger within a context.

    The previous level is restored on exit, including when the block raises.

    Examples
    --------
    >>> with temporary_log_level("ERROR"):
    ...     logger.warning("This won't be logged")
    ...     logger.error("This will be logged")
    """
    stdlib_logger = logging.getLogger(logger_name)
    original_level = stdlib_logger.level
    stdlib_logger.setLevel(level.upper())
    try:
        yield
    finally:
        stdlib_logger.setLevel(original_level)


def tqdm_logging_redirect(
    logger_name: str = "endodcm",
) -> AbstractContextManager[None]:
    """Route log records through tqdm so progress bars are not broken up.

    Examples
    --------
    >>> from tqdm import tqdm
    >>> with tqdm_logging_redirect():
    ...     for manifest in tqdm(manifests, desc="Converting"):
    ...         convert_manifest(manifest)
    """
    return _redirect_tqdm([logging.getLogger(logger_name)])


logger = get_logger("endodcm", DEFAULT_OR_ENV)

__all__ = [
    "get_logger",
    "logger",
    "temporary_log_level",
    "tqdm_logging_redirect",
]
