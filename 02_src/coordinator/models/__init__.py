"""Core data models for the resource coordinator."""

from .events import EventKind, LogEvent, ServiceStatus, StatusEvent
from .logs import CoordinatorLog, LogEntry, LogSeverity
from .status import ServiceStatusRecord

__all__ = [
    # Logs
    "CoordinatorLog",
    "LogEntry",
    "LogSeverity",
    # Events
    "EventKind",
    "LogEvent",
    "ServiceStatus",
    "StatusEvent",
    # Status
    "ServiceStatusRecord",
]
