"""Effects Gateway - FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, settings as default_settings
from app.api.v1.router import v1_router, effects_api_router
from app.api.v1.health import router as health_root_router
from app.api.v1 import effects as effects_api
from app.api.v1 import health as health_api
from app.effects.registry import registry
from app.jobs.in_process_runner import InProcessRunner
from app.jobs.worker import EffectWorker
from app.logging_setup import setup_logging
from app.storage.media_store import MediaStore, SupabaseMediaStore
from app.storage.task_store import TaskStore
from app.vendor.segmind import SegmindClient

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    vendor: Optional[SegmindClient] = None,
    media_store: Optional[MediaStore] = None,
) -> FastAPI:
    """Build the application. vendor/media_store default to ones built from settings."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown logic."""
        setup_logging(settings.log_level)
        logger.info("Starting Effects Gateway on port %d", settings.port)

        registry.discover()

        client = vendor or SegmindClient(
            api_key=settings.segmind_api_key,
            base_url=settings.segmind_base_url,
            timeout=settings.vendor_timeout_seconds,
            media_timeout=settings.media_fetch_timeout_seconds,
        )
        if not client.configured:
            logger.warning("SEGMIND_API_KEY is not set; every task will fail until it is")

        storage = media_store
        if storage is None and settings.storage_configured:
            storage = SupabaseMediaStore(
                bucket=settings.storage_bucket,
                max_bytes=settings.max_upload_bytes,
            )
        if storage is None:
            logger.warning("Supabase storage not configured; binary results will be inlined")

        # Start task runner
        store = TaskStore()
        worker = EffectWorker(client, storage)
        dispatcher = InProcessRunner(
            store,
            worker_fn=worker.run,
            sweep_interval_seconds=settings.sweep_interval_minutes * 60,
        )
        await dispatcher.start()
        logger.info("Task runner started")

        # Wire dispatcher into API endpoints
        effects_api.set_dispatcher(dispatcher)
        health_api.set_dispatcher(dispatcher)
        app.state.dispatcher = dispatcher

        yield

        # Shutdown
        logger.info("Shutting down Effects Gateway")
        effects_api.set_dispatcher(None)
        health_api.set_dispatcher(None)
        await dispatcher.stop()
        await client.aclose()

    app = FastAPI(
        title="Effects Gateway",
        description="Async task API over Segmind generative image, video and music effects",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount routers
    app.include_router(health_root_router, tags=["health"])  # GET /health at root
    app.include_router(v1_router)  # /api/v1/health
    app.include_router(effects_api_router)  # /api/effects, /api/{effect}/...
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=default_settings.port)
