"""Resource coordinator: typed log/status events and service lifecycle."""

from .coordinator import Coordinator
from .errors import BackendUnavailableError, CoordinatorError, InvalidArgumentError
from .event_bus import ITypedEventTarget, TypedEventBus
from .logger import (
    CombinedLogger,
    CoordinatorLogger,
    Logger,
    ScopedLogger,
    StdlibLogger,
    combine_loggers,
)
from .memory import InMemoryCoordinator
from .models import (
    CoordinatorLog,
    EventKind,
    LogEntry,
    LogEvent,
    LogSeverity,
    ServiceStatus,
    ServiceStatusRecord,
    StatusEvent,
)
from .recorder import ILogRecorder, LogRecorder
from .remote import RemoteCoordinator
from .sqlite import SqliteCoordinator
from .storage import IStorage, Storage

__all__ = [
    # Coordinators
    "Coordinator",
    "InMemoryCoordinator",
    "SqliteCoordinator",
    "RemoteCoordinator",
    # Events
    "ITypedEventTarget",
    "TypedEventBus",
    "EventKind",
    "LogEvent",
    "StatusEvent",
    "ServiceStatus",
    # Logs
    "CoordinatorLog",
    "LogSeverity",
    "LogEntry",
    "Logger",
    "ScopedLogger",
    "CombinedLogger",
    "CoordinatorLogger",
    "StdlibLogger",
    "combine_loggers",
    # Components
    "IStorage",
    "Storage",
    "ServiceStatusRecord",
    "ILogRecorder",
    "LogRecorder",
    # Errors
    "CoordinatorError",
    "InvalidArgumentError",
    "BackendUnavailableError",
]
