"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    pages: int


@router.get("/api/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint for monitoring and load balancers."""
    index = getattr(request.app.state, "site_index", None)
    if index is None:
        return HealthResponse(status="degraded", version="0.1.0", pages=0)
    return HealthResponse(status="ok", version="0.1.0", pages=len(index.pages))
