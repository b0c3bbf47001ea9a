"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from onsenfinder.core.service import OnsenService

# Global service instance (set during application lifespan)
_service: OnsenService | None = None


def set_service(service: OnsenService | None) -> None:
    """Set the global service instance (called during app lifespan)."""
    global _service
    _service = service


def get_service() -> OnsenService:
    """Get the global onsen service instance.

    Raises:
        RuntimeError: If the service is not initialized.
    """
    if _service is None:
        raise RuntimeError("Onsen service not initialized. Is the server running?")
    return _service
