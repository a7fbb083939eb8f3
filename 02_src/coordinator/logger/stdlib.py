"""Bridge from the structured logger capability to the logging module."""

import logging
from collections.abc import Mapping
from typing import Any

from ..models import LogSeverity
from .base import Logger

_LEVELS = {
    LogSeverity.DEBUG: logging.DEBUG,
    LogSeverity.INFO: logging.INFO,
    LogSeverity.WARN: logging.WARNING,
    LogSeverity.ERROR: logging.ERROR,
}


class StdlibLogger(Logger):
    """Writes records to a `logging.Logger`, context as the `context` extra."""

    def __init__(self, target: logging.Logger | str):
        if isinstance(target, str):
            target = logging.getLogger(target)
        self._target = target

    def log(
        self,
        severity: LogSeverity | str,
        area: str,
        message: str,
        object: Any = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        severity = LogSeverity(severity)
        extra_context = dict(context or {})
        if object is not None:
            extra_context["object"] = object

        self._target.log(
            _LEVELS[severity],
            "[%s] %s",
            area,
            message,
            extra={"context": extra_context},
        )
