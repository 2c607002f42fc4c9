"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from simlibrary.api.dependencies import attach_engine_manager
from simlibrary.api.engine_manager import EngineManager
from simlibrary.api.routes import api_router
from simlibrary.config import EngineConfig
from simlibrary.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    config: EngineConfig | None = None,
    manager: EngineManager | None = None,
    autostart: bool = True,
) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    A prebuilt *manager* is attached immediately; otherwise one is created
    when the app starts up. With ``autostart=False`` the tick thread is left
    stopped and ticks only advance through ``/control/step``.
    """
    if config is None:
        config = manager.config if manager is not None else EngineConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        active = manager if manager is not None else EngineManager(_config)
        attach_engine_manager(app, active)
        if autostart:
            active.start()
            logger.info("API server started, tower running.")
        yield
        active.stop()
        attach_engine_manager(app, None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="SimLibrary Engine",
        description=(
            "Tick-driven library tower simulation.\n\n"
            "## API Groups\n\n"
            "- **State**: live tower view, notifications and the event feed\n"
            "- **Actions**: player actions (build, hire, restock, shop)\n"
            "- **Control**: engine lifecycle: start, pause, resume, step, reset\n"
            "- **Config**: read-only engine configuration\n"
            "- **Metadata**: content catalog definitions\n"
        ),
        version="0.3.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live tower state polled by the client."},
            {"name": "Actions", "description": "Player actions. Failures come back as `success: false` with an error code."},
            {"name": "Control", "description": "Engine lifecycle controls: start, pause, resume, single-step and reset."},
            {"name": "Config", "description": "Read-only engine configuration parameters."},
            {"name": "Metadata", "description": "Floor types, staff, readers, events, perks and every other catalog entry, serialized from the pydantic dataclasses in simlibrary/core/catalog.py."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    attach_engine_manager(app, manager)

    return app
