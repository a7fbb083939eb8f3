"""Health API routes."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication


class HealthResponse(BaseModel):
    """Response model for health."""

    status: str
    url: str


def create_health_router(app: IApplication) -> APIRouter:
    """Create health router."""
    router = APIRouter(prefix="/api", tags=["health"])

    @router.get("/health", response_model=HealthResponse)
    async def health() -> dict:
        """Report liveness and the coordinator url."""
        try:
            return {"status": "ok", "url": app.coordinator.url}
        except RuntimeError as e:
            raise HTTPException(status_code=503, detail=str(e))

    return router
