"""Events dispatched on a Coordinator's event bus."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from .logs import CoordinatorLog


class EventKind(str, Enum):
    """The closed set of event kinds a Coordinator dispatches."""

    LOG = "log"
    STATUS = "status"


class ServiceStatus(str, Enum):
    """Lifecycle status of a service on a resource."""

    RUNNING = "running"
    STOPPED = "stopped"


# eq=False: every event is a distinct occurrence, compared and hashed by identity


@dataclass(frozen=True, eq=False)
class LogEvent:
    """A log record produced for a resource (or the coordinator itself)."""

    kind: ClassVar[EventKind] = EventKind.LOG

    resource_id: str | None
    log: CoordinatorLog
    should_distribute: bool = False


@dataclass(frozen=True, eq=False)
class StatusEvent:
    """A service on a resource changed status."""

    kind: ClassVar[EventKind] = EventKind.STATUS

    resource_id: str
    service: str
    status: ServiceStatus

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", ServiceStatus(self.status))
