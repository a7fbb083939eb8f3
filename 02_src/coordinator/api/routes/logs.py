"""Log ingestion and query API routes."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication
from ...models import CoordinatorLog, LogEvent, LogSeverity
from .status import raise_http_error


class LogRequest(BaseModel):
    """Request model for a forwarded log record."""

    resource_id: str | None = None
    severity: LogSeverity
    area: str = ""
    message: str
    object: Any = None
    context: dict[str, Any] = Field(default_factory=dict)


class LogAcceptedResponse(BaseModel):
    """Response model for an ingested log record."""

    id: str


class LogEntryResponse(BaseModel):
    """Response model for a stored log record."""

    id: str
    resource_id: str | None
    severity: LogSeverity
    area: str
    message: str
    object: Any = None
    context: dict[str, Any]
    timestamp: datetime


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass
    return datetime.now(timezone.utc)


def create_logs_router(app: IApplication) -> APIRouter:
    """Create logs router."""
    router = APIRouter(prefix="/api", tags=["logs"])

    @router.post("/logs", response_model=LogAcceptedResponse, status_code=202)
    async def ingest_log(request: LogRequest) -> dict:
        """Store a forwarded log record and dispatch it locally."""
        try:
            context = dict(request.context)
            context["timestamp"] = _parse_timestamp(context.get("timestamp"))
            log = CoordinatorLog(
                severity=request.severity,
                area=request.area,
                message=request.message,
                object=request.object,
                context=context,
            )

            entry = await app.storage.save_log_record(request.resource_id, log)

            # Already distributed: local listeners only
            app.coordinator.dispatch_event(
                LogEvent(request.resource_id, log, should_distribute=False)
            )
            return {"id": entry.id}
        except Exception as e:
            raise_http_error(e)

    @router.get("/logs", response_model=list[LogEntryResponse])
    async def get_logs(
        resource_id: str | None = Query(None, description="Filter by resource"),
        after: str | None = Query(None, description="ISO timestamp filter"),
        severity: LogSeverity | None = Query(None, description="Filter by severity"),
        limit: int = Query(100, ge=1, le=1000),
    ) -> list[dict]:
        """Get stored log records with optional filters."""
        try:
            # Parse after timestamp
            after_dt = None
            if after:
                try:
                    after_dt = datetime.fromisoformat(after)
                except ValueError:
                    raise HTTPException(
                        status_code=400, detail="Invalid after timestamp format"
                    )

            entries = await app.storage.get_log_records(
                resource_id=resource_id,
                after=after_dt,
                severity=severity,
                limit=limit,
            )

            return [
                {
                    "id": e.id,
                    "resource_id": e.resource_id,
                    "severity": e.log.severity,
                    "area": e.log.area,
                    "message": e.log.message,
                    "object": e.log.object,
                    "context": dict(e.log.context),
                    "timestamp": e.timestamp.isoformat(),
                }
                for e in entries
            ]
        except Exception as e:
            raise_http_error(e)

    return router
