from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from equipment_inventory.api import errors
from equipment_inventory.api.routers.healthz import router as healthz_router
from equipment_inventory.api.routers.products import router as products_router
from equipment_inventory.api.routers.readyz import router as readyz_router
from equipment_inventory.core.config import Settings, get_settings
from equipment_inventory.db import Database
from equipment_inventory.logging import setup_logging
from equipment_inventory.middleware.rate_limit import rate_limit_middleware
from equipment_inventory.middleware.request_id import request_id_middleware
from equipment_inventory.middleware.security_headers import security_headers_middleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger = structlog.get_logger(__name__)
    database: Database = app.state.database
    database.connect()
    logger.info("database_connected")
    try:
        yield
    finally:
        await database.dispose()
        logger.info("database_disposed")


def _init_sentry(settings: Settings) -> None:
    if not settings.sentry_dsn:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.app_env,
        release=settings.release,
        integrations=[StarletteIntegration()],
        traces_sample_rate=settings.traces_rate,
        send_default_pii=False,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    setup_logging()
    settings = settings or get_settings()
    _init_sentry(settings)

    app = FastAPI(title="Equipment Inventory", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    # connected in lifespan; tests override the service dependencies instead
    app.state.database = Database(settings.database_url)

    app.middleware("http")(request_id_middleware)
    app.middleware("http")(security_headers_middleware)
    app.middleware("http")(rate_limit_middleware)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=False,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "HEAD"],
            allow_headers=["Content-Type", "X-Admin-Password", "X-Request-ID"],
            expose_headers=["X-Request-ID"],
        )

    errors.install(app)
    app.include_router(products_router)
    app.include_router(healthz_router)
    app.include_router(readyz_router)

    log = structlog.get_logger(__name__)
    log.info("app_startup", env=settings.app_env)
    if not settings.admin_password:
        log.warning("admin_password_unset", effect="mutating requests will be rejected")
    return app


app = create_app()
