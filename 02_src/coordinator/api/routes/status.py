"""Service status API routes."""

import asyncio
from datetime import datetime

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication
from ...config import MAX_WAIT_TIMEOUT
from ...errors import BackendUnavailableError, InvalidArgumentError
from ...models import ServiceStatus

STATUS_PATH = "/resources/{resource_id}/services/{service}/status"


class StatusRequest(BaseModel):
    """Request model for setting a status."""

    status: ServiceStatus


class StatusResponse(BaseModel):
    """Response model for a service status."""

    resource_id: str
    service: str
    status: ServiceStatus | None


class WaitResponse(BaseModel):
    """Response model for a status wait."""

    resource_id: str
    service: str
    matched: bool
    status: ServiceStatus | None


class ServiceStatusResponse(BaseModel):
    """Response model for a stored service status."""

    resource_id: str
    service: str
    status: ServiceStatus
    updated_at: datetime


def raise_http_error(error: Exception) -> None:
    """Translate coordinator errors to HTTP errors."""
    if isinstance(error, HTTPException):
        raise error
    if isinstance(error, InvalidArgumentError):
        raise HTTPException(status_code=400, detail=str(error))
    if isinstance(error, BackendUnavailableError):
        raise HTTPException(status_code=503, detail=str(error))
    raise HTTPException(status_code=500, detail=str(error))


def create_status_router(app: IApplication) -> APIRouter:
    """Create service status router."""
    router = APIRouter(prefix="/api", tags=["status"])

    @router.put(STATUS_PATH, response_model=StatusResponse)
    async def set_service_status(
        resource_id: str, service: str, request: StatusRequest
    ) -> dict:
        """Record a service status."""
        try:
            await app.coordinator.set_service_status(
                resource_id, service, request.status
            )
            return {
                "resource_id": resource_id,
                "service": service,
                "status": request.status,
            }
        except Exception as e:
            raise_http_error(e)

    @router.get(STATUS_PATH, response_model=StatusResponse)
    async def get_service_status(resource_id: str, service: str) -> dict:
        """Get a service status (null if never recorded)."""
        try:
            status = await app.coordinator.get_service_status(resource_id, service)
            return {"resource_id": resource_id, "service": service, "status": status}
        except Exception as e:
            raise_http_error(e)

    @router.get(STATUS_PATH + "/wait", response_model=WaitResponse)
    async def wait_for_service_status(
        resource_id: str,
        service: str,
        expected: ServiceStatus = Query(..., description="Status to wait for"),
        timeout: float | None = Query(
            None, gt=0, le=MAX_WAIT_TIMEOUT, description="Seconds to wait"
        ),
    ) -> dict:
        """Long-poll until the service has the expected status or timeout expires.

        Without a timeout the configured COORDINATOR_WAIT_TIMEOUT applies.
        """
        if timeout is None:
            timeout = min(app.settings.wait_timeout, MAX_WAIT_TIMEOUT)
        try:
            try:
                await asyncio.wait_for(
                    app.coordinator.wait_for_service_status(
                        resource_id, service, expected
                    ),
                    timeout,
                )
                matched = True
                status = expected
            except asyncio.TimeoutError:
                matched = False
                status = await app.coordinator.get_service_status(resource_id, service)

            return {
                "resource_id": resource_id,
                "service": service,
                "matched": matched,
                "status": status,
            }
        except Exception as e:
            raise_http_error(e)

    @router.get(
        "/resources/{resource_id}/services",
        response_model=list[ServiceStatusResponse],
    )
    async def list_service_statuses(resource_id: str) -> list[dict]:
        """List recorded service statuses of a resource."""
        try:
            records = await app.storage.list_service_statuses(resource_id)
            return [
                {
                    "resource_id": r.resource_id,
                    "service": r.service,
                    "status": r.status,
                    "updated_at": r.updated_at.isoformat(),
                }
                for r in records
            ]
        except Exception as e:
            raise_http_error(e)

    return router
