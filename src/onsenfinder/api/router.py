"""API router — onsen resource and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from onsenfinder.api.endpoints.health import router as health_router
from onsenfinder.api.endpoints.onsen import router as onsen_router

router = APIRouter()
router.include_router(onsen_router, prefix="/onsen", tags=["onsen"])
router.include_router(health_router, tags=["health"])
