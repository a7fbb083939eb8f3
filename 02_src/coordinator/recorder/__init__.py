"""LogRecorder module."""

from .recorder import ILogRecorder, LogRecorder

__all__ = ["ILogRecorder", "LogRecorder"]
