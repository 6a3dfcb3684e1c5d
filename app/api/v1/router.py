"""Aggregate all API routers."""

from fastapi import APIRouter
from app.api.v1.health import router as health_router
from app.api.v1.effects import router as effects_router

v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(health_router, tags=["health"])

# Effect routes keep the /api/<effect>/... paths clients already call
effects_api_router = APIRouter(prefix="/api")
effects_api_router.include_router(effects_router, tags=["effects"])
