"""In-process coordinator keeping status in a dict."""

import asyncio
import uuid

from .coordinator import Coordinator
from .models import ServiceStatus, StatusEvent


class InMemoryCoordinator(Coordinator):
    """Coordinator for a single process; status lives and dies with it."""

    def __init__(self, url: str | None = None):
        super().__init__()
        self._url = url or f"memory://{uuid.uuid4()}"
        self._statuses: dict[tuple[str, str], ServiceStatus] = {}
        self._lock = asyncio.Lock()

    @property
    def url(self) -> str:
        return self._url

    async def set_service_status(
        self, resource_id: str, service: str, status: ServiceStatus | str
    ) -> None:
        self._validate_pair(resource_id, service)
        status = self._coerce_status(status)

        async with self._lock:
            self._statuses[(resource_id, service)] = status
            self.dispatch_event(StatusEvent(resource_id, service, status))

    async def get_service_status(
        self, resource_id: str, service: str
    ) -> ServiceStatus | None:
        self._validate_pair(resource_id, service)
        return self._statuses.get((resource_id, service))

    async def wait_for_service_status(
        self, resource_id: str, service: str, expected_status: ServiceStatus | str
    ) -> None:
        self._validate_pair(resource_id, service)
        expected_status = self._coerce_status(expected_status)
        await self._wait_for_status_event(resource_id, service, expected_status)
