"""Coordinator backed by SQLite status storage."""

import asyncio

import aiosqlite

from .coordinator import Coordinator
from .errors import BackendUnavailableError
from .logging_config import get_logger
from .models import ServiceStatus, StatusEvent
from .storage import IStorage

logger = get_logger(__name__)


class SqliteCoordinator(Coordinator):
    """Coordinator whose service statuses live in a SQLite database.

    Several processes may share one database file. Waits are resolved by
    this instance's StatusEvents and, for writes made elsewhere, by polling
    the database with exponential backoff between `poll_interval` and
    `max_poll_interval` seconds.
    """

    def __init__(
        self,
        storage: IStorage,
        url: str | None = None,
        poll_interval: float = 0.5,
        max_poll_interval: float = 5.0,
    ):
        super().__init__()
        self._storage = storage
        self._url = url or f"sqlite:///{getattr(storage, 'db_path', ':memory:')}"
        self._poll_interval = poll_interval
        self._max_poll_interval = max_poll_interval
        self._lock = asyncio.Lock()

    @property
    def url(self) -> str:
        return self._url

    @property
    def storage(self) -> IStorage:
        return self._storage

    async def set_service_status(
        self, resource_id: str, service: str, status: ServiceStatus | str
    ) -> None:
        self._validate_pair(resource_id, service)
        status = self._coerce_status(status)

        # Write and dispatch together so events follow write order
        async with self._lock:
            try:
                await self._storage.save_service_status(resource_id, service, status)
            except (aiosqlite.Error, RuntimeError) as e:
                raise BackendUnavailableError(
                    f"Failed to store status of {resource_id}/{service}: {e}"
                ) from e

            logger.debug("Service %s/%s is now %s", resource_id, service, status.value)
            self.dispatch_event(StatusEvent(resource_id, service, status))

    async def get_service_status(
        self, resource_id: str, service: str
    ) -> ServiceStatus | None:
        self._validate_pair(resource_id, service)
        try:
            return await self._storage.get_service_status(resource_id, service)
        except (aiosqlite.Error, RuntimeError) as e:
            raise BackendUnavailableError(
                f"Failed to read status of {resource_id}/{service}: {e}"
            ) from e

    async def wait_for_service_status(
        self, resource_id: str, service: str, expected_status: ServiceStatus | str
    ) -> None:
        self._validate_pair(resource_id, service)
        expected_status = self._coerce_status(expected_status)
        await self._wait_for_status_event(
            resource_id,
            service,
            expected_status,
            poll_interval=self._poll_interval,
            max_poll_interval=self._max_poll_interval,
        )
