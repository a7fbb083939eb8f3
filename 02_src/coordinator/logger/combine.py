"""Fan-out of log calls to several loggers."""

from collections.abc import Mapping
from typing import Any

from ..logging_config import get_logger
from ..models import LogSeverity
from .base import Logger

logger = get_logger(__name__)


class CombinedLogger(Logger):
    """Forwards every log call to each wrapped logger, in order."""

    def __init__(self, loggers: list[Logger]):
        self._loggers = list(loggers)

    @property
    def loggers(self) -> list[Logger]:
        return list(self._loggers)

    def log(
        self,
        severity: LogSeverity | str,
        area: str,
        message: str,
        object: Any = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        for target in self._loggers:
            # Each target gets its own context copy
            try:
                target.log(
                    severity,
                    area,
                    message,
                    object,
                    dict(context) if context is not None else None,
                )
            except Exception:
                logger.exception("Error in combined logger %r", target)


def combine_loggers(*loggers: Logger) -> Logger:
    """Combine loggers into one; a single logger is returned unchanged."""
    if len(loggers) == 1:
        return loggers[0]
    return CombinedLogger(list(loggers))
