"""Coordinator that talks to a coordinator service over HTTP."""

import asyncio
import json
from datetime import datetime
from urllib.parse import quote

import httpx

from .config import MAX_WAIT_TIMEOUT
from .coordinator import Coordinator
from .errors import BackendUnavailableError, InvalidArgumentError
from .logging_config import get_logger
from .models import EventKind, LogEvent, ServiceStatus, StatusEvent

logger = get_logger(__name__)


def _jsonable(value):
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class RemoteCoordinator(Coordinator):
    """HTTP client for the coordinator service API.

    Status calls go to the service; StatusEvents are dispatched locally once
    the service confirms a write. Distributable LogEvents are forwarded to
    `POST /api/logs` without blocking the dispatch.
    """

    def __init__(
        self,
        url: str,
        client: httpx.AsyncClient | None = None,
        wait_timeout: float = 30.0,
        forward_logs: bool = True,
    ):
        super().__init__()
        if wait_timeout <= 0:
            raise InvalidArgumentError("wait_timeout must be positive")
        self._url = url.rstrip("/")
        # The service caps a single long-poll; longer waits just poll again
        self._wait_timeout = min(wait_timeout, MAX_WAIT_TIMEOUT)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=10.0)
        self._wait_request_timeout = httpx.Timeout(10.0, read=self._wait_timeout + 10.0)
        self._lock = asyncio.Lock()

        if forward_logs:
            self.add_event_listener(EventKind.LOG, self._forward_log)

    @property
    def url(self) -> str:
        return self._url

    async def __aenter__(self) -> "RemoteCoordinator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Finish pending log forwards and close the HTTP client if owned."""
        await self.event_bus.drain()
        if self._owns_client:
            await self._client.aclose()

    def _status_path(self, resource_id: str, service: str) -> str:
        return (
            f"/api/resources/{quote(resource_id, safe='')}"
            f"/services/{quote(service, safe='')}/status"
        )

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, self._url + path, **kwargs)
        except httpx.HTTPError as e:
            raise BackendUnavailableError(f"{method} {path} failed: {e}") from e

        if response.status_code in (400, 422):
            raise InvalidArgumentError(response.text)
        if response.is_error:
            raise BackendUnavailableError(
                f"{method} {path} returned {response.status_code}: {response.text}"
            )
        return response

    async def set_service_status(
        self, resource_id: str, service: str, status: ServiceStatus | str
    ) -> None:
        self._validate_pair(resource_id, service)
        status = self._coerce_status(status)

        async with self._lock:
            await self._request(
                "PUT",
                self._status_path(resource_id, service),
                json={"status": status.value},
            )
            self.dispatch_event(StatusEvent(resource_id, service, status))

    async def get_service_status(
        self, resource_id: str, service: str
    ) -> ServiceStatus | None:
        self._validate_pair(resource_id, service)
        response = await self._request("GET", self._status_path(resource_id, service))
        status = response.json()["status"]
        return ServiceStatus(status) if status is not None else None

    async def wait_for_service_status(
        self, resource_id: str, service: str, expected_status: ServiceStatus | str
    ) -> None:
        self._validate_pair(resource_id, service)
        expected_status = self._coerce_status(expected_status)

        # Long-poll until the service reports a match
        while True:
            response = await self._request(
                "GET",
                self._status_path(resource_id, service) + "/wait",
                params={
                    "expected": expected_status.value,
                    "timeout": self._wait_timeout,
                },
                timeout=self._wait_request_timeout,
            )
            if response.json()["matched"]:
                return

    async def _forward_log(self, event: LogEvent) -> None:
        if not event.should_distribute:
            return

        log = event.log
        payload = {
            "resource_id": event.resource_id,
            "severity": log.severity.value,
            "area": log.area,
            "message": log.message,
            "object": log.object,
            "context": {key: _jsonable(value) for key, value in log.context.items()},
        }

        try:
            await self._request(
                "POST",
                "/api/logs",
                content=json.dumps(payload, default=str),
                headers={"Content-Type": "application/json"},
            )
        except (BackendUnavailableError, InvalidArgumentError) as e:
            logger.warning("Failed to forward log record: %s", e)
