"""Health check endpoint."""

from fastapi import APIRouter
import platform
import sys

from app.config import settings
from app.effects.registry import registry

router = APIRouter()

# Wired in during lifespan
_dispatcher = None


def set_dispatcher(dispatcher):
    global _dispatcher
    _dispatcher = dispatcher


@router.get("/health")
async def health_check():
    """Service health, tracked tasks and vendor configuration."""
    return {
        "status": "healthy" if _dispatcher is not None else "starting",
        "tasks": _dispatcher.counts() if _dispatcher is not None else {},
        "effects": len(registry.list_effects()),
        "segmind_configured": bool(settings.segmind_api_key),
        "storage_configured": settings.storage_configured,
        "python_version": sys.version,
        "platform": platform.platform(),
    }
