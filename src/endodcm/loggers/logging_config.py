import json as jsonlib
import logging
import logging.config
import os
from pathlib import Path
from typing import Dict, List

import pytz
import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder
from structlog.typing import Processor

from endodcm.loggers.processors import (
    CallPrettifier,
    PathPrettifier,
    ZonedTimeStamper,
)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_TIMEZONE = "UTC"

LOG_DIR_NAME = Path(".endodcm/logs")


def _known_zone(zone: str) -> str:
    try:
        pytz.timezone(zone)
    except pytz.UnknownTimeZoneError:
        return DEFAULT_LOG_TIMEZONE
    return zone


class LoggingManager:
    """
    Configure stdlib logging and structlog for a named logger.

    Three environment variables are read, each prefixed with the upper-cased
    logger name:

    - ``<NAME>_LOG_LEVEL``: initial level (default ``WARNING``)
    - ``<NAME>_ENABLE_JSON_LOGGING``: ``1`` adds a rotating JSON file handler
    - ``<NAME>_LOG_TIMEZONE``: zone used for timestamps (default ``UTC``)

    Examples
    --------
        >>> manager = LoggingManager(name="endodcm")
        >>> logger = manager.get_logger()
        >>> logger.info("Converted manifest", path="case01/capture.xml")
    """

    def __init__(
        self,
        name: str,
        base_dir: Path | None = None,
    ) -> None:
        self.name = name
        self.base_dir = base_dir or Path.cwd()
        self.level = self.env_level
        self.enable_json_logging = self._env("ENABLE_JSON_LOGGING", "0") == "1"
        requested_zone = self._env("LOG_TIMEZONE", DEFAULT_LOG_TIMEZONE)
        self.timezone = _known_zone(requested_zone)
        self.json_logfile = (
            self._create_json_logfile() if self.enable_json_logging else None
        )
        self._initialize_logger()
        if self.timezone != requested_zone:
            self.get_logger().warning(
                f"Unknown time zone {requested_zone!r} in "
                f"{self.name.upper()}_LOG_TIMEZONE, using {self.timezone}"
            )

    def _env(self, suffix: str, default: str) -> str:
        return os.environ.get(f"{self.name}_{suffix}".upper(), default)

    @property
    def env_level(self) -> str:
        return self._env("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    @property
    def base_logging_config(self) -> Dict:
        """
        Build the ``dictConfig`` mapping for the current settings.

        Returns
        -------
        dict
            Logging configuration.
        """
        base = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processors": [
                        ZonedTimeStamper(fmt="%H:%M:%S", zone=self.timezone),
                        CallPrettifier(concise=True),
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        structlog.dev.ConsoleRenderer(
                            colors=True,
                            sort_keys=False,
                            exception_formatter=structlog.dev.RichTracebackFormatter(
                                width=-1,
                                show_locals=False,
                            ),
                        ),
                    ],
                    "foreign_pre_chain": self.pre_chain,
                },
                "json": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processors": [
                        ZonedTimeStamper(zone=self.timezone),
                        CallPrettifier(concise=False),
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        structlog.processors.dict_tracebacks,
                        structlog.processors.JSONRenderer(
                            serializer=jsonlib.dumps, indent=2
                        ),
                    ],
                    "foreign_pre_chain": self.pre_chain,
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "console",
                },
            },
            "loggers": {
                self.name: {
                    "handlers": ["console"],
                    "level": self.level,
                    "propagate": False,
                },
            },
        }

        if self.json_logfile is not None:
            base["handlers"]["json"] = {  # type: ignore
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "json",
                "filename": self.json_logfile,
                "maxBytes": 10485760,
                "backupCount": 5,
            }
            base["loggers"][self.name]["handlers"].append("json")  # type: ignore

        return base

    def _create_json_logfile(self) -> Path:
        from datetime import datetime

        log_dir = self.base_dir / LOG_DIR_NAME
        log_dir.mkdir(parents=True, exist_ok=True)
        logfile = log_dir / f"{self.name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
        latest = log_dir / "latest.log"
        if latest.exists() or latest.is_symlink():
            latest.unlink()
        latest.symlink_to(logfile.name, target_is_directory=False)
        return logfile

    @property
    def pre_chain(self) -> List[Processor]:
        return [
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            CallsiteParameterAdder(
                [
                    CallsiteParameter.MODULE,
                    CallsiteParameter.FUNC_NAME,
                    CallsiteParameter.LINENO,
                ]
            ),
            PathPrettifier(base_dir=self.base_dir),
            structlog.stdlib.ExtraAdder(),
            structlog.processors.StackInfoRenderer(),
        ]

    def _initialize_logger(self) -> None:
        logging.config.dictConfig(self.base_logging_config)
        structlog.configure(
            processors=[
                *self.pre_chain,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def get_logger(self) -> structlog.stdlib.BoundLogger:
        return structlog.get_logger(self.name)

    def configure_logging(
        self, level: str = DEFAULT_LOG_LEVEL
    ) -> structlog.stdlib.BoundLogger:
        """
        Re-apply the configuration with a new level.

        Raises
        ------
        ValueError
            If an invalid log level is specified.
        """
        level_upper = level.upper()
        if level_upper not in VALID_LOG_LEVELS:
            msg = f"Invalid logging level: {level}"
            raise ValueError(msg)

        self.level = level_upper
        self._initialize_logger()
        return self.get_logger()
