"""Health check endpoint."""

from fastapi import APIRouter

from campustour.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    """Liveness probe for the load balancer."""
    return {"status": "ok", "app": settings.app_name}
