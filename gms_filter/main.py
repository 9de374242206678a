# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — FastAPI Application Entry Point
Creates the app, registers lifespan events, routers
and global error handlers.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from gms_filter.api.middleware.error_handler import register_error_handlers
from gms_filter.api.routes import filter as filter_route
from gms_filter.config import get_settings
from gms_filter.utils.logger import configure_logging, get_logger

log = get_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Startup: configure logging and report the active grid configuration.
    """
    # ── Startup ──────────────────────────────────────────────────────────────
    configure_logging()
    settings = get_settings()

    log.info(
        "gms_filter_startup",
        version=VERSION,
        grid_size=settings.grid_size,
        threshold_factor=settings.threshold_factor,
        max_keypoints=settings.max_keypoints,
    )
    yield

    # ── Shutdown ─────────────────────────────────────────────────────────────
    log.info("gms_filter_shutdown")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="GMS Filter",
        summary="Grid-based Motion Statistics outlier rejection for feature matches.",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # ── Error Handlers ───────────────────────────────────────────────────────
    register_error_handlers(app)

    # ── Routers ──────────────────────────────────────────────────────────────
    app.include_router(filter_route.router)

    # ── Health Check ─────────────────────────────────────────────────────────
    @app.get("/health", tags=["health"], summary="Health check")
    async def health() -> dict:
        return {
            "status": "ok",
            "service": "gms_filter",
            "version": VERSION,
            "grid_size": settings.grid_size,
            "threshold_factor": settings.threshold_factor,
        }

    return app


# Module-level app instance for uvicorn
app = create_app()
