"""FastAPI application serving directory queries.

Run with ``uvicorn main:server_app``. In production the lifespan also starts
the daily crawl schedule and the queue consumer unless the crawl and write
stages run as separately deployed functions (RUN_WORKERS false).
"""

import threading
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from structlog.stdlib import BoundLogger

from api.dependencies.rate_limits import setup_rate_limiter
from api.errors import register_exception_handlers
from api.middleware import CorrelationIdMiddleware
from api.router import api_router
from infrastructure.configuration import Settings
from infrastructure.logging import configure_logging
from infrastructure.services import get_settings
from jobs import scheduled_tasks


def _list_configs(settings: Settings, logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _start_workers(settings: Settings, logger: BoundLogger) -> List[threading.Event]:
    if not settings.is_production or not settings.org_directory.RUN_WORKERS:
        logger.info("workers_skipped", reason="not_enabled")
        return []
    if not settings.org_directory.is_configured:
        logger.warning("workers_skipped", reason="org_directory_not_configured")
        return []

    scheduled_tasks.init()
    stop_events = [scheduled_tasks.run_continuously(), scheduled_tasks.run_consumer()]
    logger.info("workers_started")
    return stop_events


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = configure_logging(
        log_level=settings.LOG_LEVEL,
        is_production=settings.is_production,
        app_version=settings.GIT_SHA,
    )

    app.state.settings = settings
    logger.info("application_startup")
    _list_configs(settings, logger)

    stop_events = _start_workers(settings, logger)

    yield

    logger.info("application_shutdown")
    for stop_event in stop_events:
        stop_event.set()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="AWS Org Metadata", lifespan=lifespan)

    setup_rate_limiter(app)
    register_exception_handlers(app)

    allow_origins = (
        ["*"]
        if settings.is_production
        else [
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(api_router)
    return app


server_app = create_app()
