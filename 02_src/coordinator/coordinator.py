"""Coordinator contract: typed events, scoped loggers, service status."""

import asyncio
from abc import ABC, abstractmethod
from typing import Literal, overload

from .errors import InvalidArgumentError
from .event_bus import Event, LogListener, StatusListener, TypedEventBus
from .logger import CoordinatorLogger, Logger, combine_loggers
from .models import EventKind, ServiceStatus, StatusEvent


class Coordinator(ABC):
    """Event source for log/status events and owner of service status.

    Subclasses store status in a backend. After `set_service_status`
    returns, `get_service_status` must return the new value for the pair and
    a StatusEvent carrying it must already have been dispatched.
    """

    def __init__(self):
        self._target = TypedEventBus()

    # Event source

    @overload
    def add_event_listener(
        self, kind: Literal[EventKind.LOG, "log"], listener: LogListener | None
    ) -> None: ...

    @overload
    def add_event_listener(
        self,
        kind: Literal[EventKind.STATUS, "status"],
        listener: StatusListener | None,
    ) -> None: ...

    def add_event_listener(self, kind, listener) -> None:
        """Register a `log` or `status` listener."""
        self._target.add_event_listener(kind, listener)

    @overload
    def remove_event_listener(
        self, kind: Literal[EventKind.LOG, "log"], listener: LogListener | None
    ) -> None: ...

    @overload
    def remove_event_listener(
        self,
        kind: Literal[EventKind.STATUS, "status"],
        listener: StatusListener | None,
    ) -> None: ...

    def remove_event_listener(self, kind, listener) -> None:
        """Remove a `log` or `status` listener."""
        self._target.remove_event_listener(kind, listener)

    def dispatch_event(self, event: Event) -> bool:
        """Synchronously dispatch an event to its listeners."""
        return self._target.dispatch_event(event)

    @property
    def event_bus(self) -> TypedEventBus:
        return self._target

    # Service status

    @abstractmethod
    async def set_service_status(
        self, resource_id: str, service: str, status: ServiceStatus | str
    ) -> None:
        """Record a status and dispatch a StatusEvent before returning."""

    @abstractmethod
    async def get_service_status(
        self, resource_id: str, service: str
    ) -> ServiceStatus | None:
        """Current status, or None if none was ever recorded."""

    @abstractmethod
    async def wait_for_service_status(
        self, resource_id: str, service: str, expected_status: ServiceStatus | str
    ) -> None:
        """Return once the pair has the expected status."""

    @property
    @abstractmethod
    def url(self) -> str:
        """Identity of this coordinator instance."""

    # Loggers

    def create_logger(self, resource_id: str | None = None, *loggers: Logger) -> Logger:
        """Logger whose records are dispatched here, optionally fanned out."""
        coordinator_logger = CoordinatorLogger(resource_id, self).create_scope(
            "", resource_id
        )

        if loggers:
            return combine_loggers(coordinator_logger, *loggers)

        return coordinator_logger

    # Helpers for subclasses

    @staticmethod
    def _validate_pair(resource_id: str, service: str) -> None:
        for name, value in (("resource_id", resource_id), ("service", service)):
            if not isinstance(value, str) or not value.strip():
                raise InvalidArgumentError(f"{name} must be a non-empty string")

    @staticmethod
    def _coerce_status(status: ServiceStatus | str) -> ServiceStatus:
        try:
            return ServiceStatus(status)
        except ValueError:
            raise InvalidArgumentError(f"Unknown service status: {status!r}") from None

    async def _wait_for_status_event(
        self,
        resource_id: str,
        service: str,
        expected_status: ServiceStatus,
        poll_interval: float | None = None,
        max_poll_interval: float | None = None,
    ) -> None:
        """Subscribe, then check, then await a matching StatusEvent.

        With `poll_interval`, the backend is also re-queried with
        exponential backoff (capped at `max_poll_interval`) for changes that
        never pass through this instance's bus. The listener is removed on
        match, error and cancellation.
        """
        matched = asyncio.get_running_loop().create_future()

        def on_status(event: StatusEvent) -> None:
            if (
                event.resource_id == resource_id
                and event.service == service
                and event.status == expected_status
                and not matched.done()
            ):
                matched.set_result(None)

        self.add_event_listener(EventKind.STATUS, on_status)
        try:
            # Subscribed first so a change racing this check is still seen
            if await self.get_service_status(resource_id, service) == expected_status:
                return

            if poll_interval is None:
                await matched
                return

            delay = poll_interval
            while True:
                try:
                    await asyncio.wait_for(asyncio.shield(matched), delay)
                    return
                except asyncio.TimeoutError:
                    pass

                if await self.get_service_status(resource_id, service) == expected_status:
                    return
                if max_poll_interval is not None:
                    delay = min(delay * 2, max_poll_interval)
        finally:
            self.remove_event_listener(EventKind.STATUS, on_status)
