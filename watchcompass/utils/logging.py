"""Logging setup for the WatchCompass service.

Everything goes to stdout through the root logger. Client libraries that log
every request (httpx, httpcore, redis) are held at WARNING so TMDB retries and
cache failures stay readable.
"""

import logging
import sys

from watchcompass.config import LogLevel, Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
QUIET_LOGGERS = ("httpx", "httpcore", "redis", "uvicorn.access")


def setup_logging(settings: Settings | None = None, level: LogLevel | None = None) -> None:
    """Configure the root logger from settings.

    Args:
        settings: Source of LOG_LEVEL and APP_ENV (default: cached settings)
        level: Explicit override, wins over settings
    """
    settings = settings or get_settings()
    level = level or settings.effective_log_level

    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # basicConfig leaves an already configured root alone
    logging.getLogger().setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """Logger wrapper that prefixes messages with [key=value] pairs.

    Used to tag every line of one recommendation run with its mood, budget and
    query. ``bind`` returns a new context with extra pairs appended.
    """

    def __init__(self, logger: logging.Logger, **context: object) -> None:
        self.logger = logger
        self.context = context
        self.prefix = " ".join(f"[{k}={v}]" for k, v in context.items())

    def bind(self, **extra: object) -> "LogContext":
        return LogContext(self.logger, **{**self.context, **extra})

    def _log(self, level: int, msg: str) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, f"{self.prefix} {msg}" if self.prefix else msg)

    def debug(self, msg: str) -> None:
        self._log(logging.DEBUG, msg)

    def info(self, msg: str) -> None:
        self._log(logging.INFO, msg)

    def warning(self, msg: str) -> None:
        self._log(logging.WARNING, msg)
