"""Health check endpoint — service and search engine status."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from onsenfinder import __version__
from onsenfinder.adapters.base.adapter import StoreHealth
from onsenfinder.api.deps import get_service
from onsenfinder.core.service import OnsenService

router = APIRouter()


class HealthResponse(BaseModel):
    """System health check response."""

    status: str = Field(description="Service status (always 'healthy' while serving)")
    version: str = Field(description="Onsen Finder version")
    service: str = Field(description="Service name ('onsenfinder')")
    engine: StoreHealth = Field(description="Health of the backing search engine")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns server version and the cluster health of the backing search engine.",
)
async def health_check(
    service: OnsenService = Depends(get_service),
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        service="onsenfinder",
        engine=await service.store.health_check(),
    )
