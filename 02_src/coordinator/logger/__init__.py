"""Structured loggers."""

from .base import Logger, ScopedLogger, join_area
from .combine import CombinedLogger, combine_loggers
from .coordinator_logger import CoordinatorLogger, ILogEventTarget
from .stdlib import StdlibLogger

__all__ = [
    "CombinedLogger",
    "CoordinatorLogger",
    "ILogEventTarget",
    "Logger",
    "ScopedLogger",
    "StdlibLogger",
    "combine_loggers",
    "join_area",
]
