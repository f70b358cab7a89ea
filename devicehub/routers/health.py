"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Basic liveness health check.

    Returns:
        Status message (always returns 200 OK if service is running)
    """
    return {"status": "ok"}
