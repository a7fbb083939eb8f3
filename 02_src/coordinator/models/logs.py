"""Structured log record models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any


class LogSeverity(str, Enum):
    """Log severities understood by every logger."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class CoordinatorLog:
    """A single structured log record carried by a LogEvent."""

    severity: LogSeverity
    area: str
    message: str
    object: Any = None
    context: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Frozen: go through object.__setattr__ for normalisation
        object.__setattr__(self, "severity", LogSeverity(self.severity))
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))

    @property
    def timestamp(self):
        """Timestamp from context, if one was stamped."""
        return self.context.get("timestamp")


@dataclass
class LogEntry:
    """A log record persisted by a storage backend."""

    id: str
    resource_id: str | None
    log: CoordinatorLog
    timestamp: datetime
