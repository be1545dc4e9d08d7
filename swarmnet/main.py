"""SwarmNet Ledger API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SwarmNetError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py so tests can build their own app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from swarmnet.api.error_handlers import register_error_handlers
from swarmnet.api.routes import devices, health, ledger, network, registry, tasks
from swarmnet.config import get_settings
from swarmnet.infrastructure.database import init_db
from swarmnet.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    policy = settings.task_policy()
    logger.info(
        f"SwarmNet ledger started (task guards "
        f"{'on' if policy.enforce_guards else 'off'})",
    )
    yield
    logger.info("SwarmNet ledger shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title="SwarmNet Ledger API", version="0.1.0", lifespan=lifespan,
    )

    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(registry.router)
    app.include_router(devices.router)
    app.include_router(ledger.router)
    app.include_router(tasks.router)
    app.include_router(network.router)

    register_error_handlers(app)
    return app


app = create_app()
