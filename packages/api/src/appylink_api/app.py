"""FastAPI application factory."""

from __future__ import annotations

import time
from typing import Callable

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from appylink_shared import __version__
from appylink_shared.constants import BRAND_NAME, BRAND_TAGLINE
from appylink_shared.config import settings
from appylink_shared.db import is_supabase_configured

from appylink_api.errors import register_error_handlers
from appylink_api.middleware.logging import LoggingMiddleware
from appylink_api.routers.health import router as health_router
from appylink_api.routers.v1 import v1_router
from appylink_api.storage import KeyValueStorage, MemoryStorage
from appylink_api.utils.logging import configure_logging

logger = structlog.get_logger()


def create_app(
    *,
    storage: KeyValueStorage | None = None,
    clock: Callable[[], float] = time.time,
) -> FastAPI:
    """
    Build the API.

    `storage` holds per-client favorites, compare lists, drafts and form
    cooldowns; it defaults to a process-local MemoryStorage bounded by the
    client_state_* settings. `clock` is injectable so cooldowns and expiry
    can be exercised without sleeping.
    """
    configure_logging()

    app = FastAPI(
        title=f"{BRAND_NAME} API",
        description=BRAND_TAGLINE,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    register_error_handlers(app)

    if storage is None:
        storage = MemoryStorage(
            ttl=settings.client_state_ttl,
            max_keys=settings.client_state_max_keys,
            clock=clock,
        )
    app.state.client_storage = storage
    app.state.clock = clock

    app.include_router(health_router)
    app.include_router(v1_router)

    logger.info(
        "app_created",
        cors_origins=settings.cors_origins_list,
        data_source="live" if is_supabase_configured() else "local",
    )
    return app


app = create_app()
