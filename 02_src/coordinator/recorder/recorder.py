"""LogRecorder: persists distributable log events."""

from typing import Protocol

from ..event_bus import ITypedEventTarget
from ..logging_config import get_logger
from ..models import EventKind, LogEvent
from ..storage import IStorage

logger = get_logger(__name__)


class ILogRecorder(Protocol):
    """Persisting LogEvents marked for distribution."""

    async def start(self) -> None:
        """Subscribe to `log` events."""
        ...

    async def stop(self) -> None:
        """Unsubscribe from `log` events."""
        ...


class LogRecorder:
    """Saves every LogEvent with should_distribute set to Storage."""

    def __init__(self, coordinator: ITypedEventTarget, storage: IStorage):
        self._coordinator = coordinator
        self._storage = storage
        self._recorded = 0

    @property
    def recorded(self) -> int:
        """Number of records saved since creation."""
        return self._recorded

    async def start(self) -> None:
        """Subscribe to `log` events."""
        self._coordinator.add_event_listener(EventKind.LOG, self._handle_log_event)

    async def stop(self) -> None:
        """Unsubscribe from `log` events."""
        self._coordinator.remove_event_listener(EventKind.LOG, self._handle_log_event)

    async def _handle_log_event(self, event: LogEvent) -> None:
        """Persist a distributable LogEvent; local-only events are skipped."""
        if not event.should_distribute:
            return

        await self._storage.save_log_record(event.resource_id, event.log)
        self._recorded += 1
