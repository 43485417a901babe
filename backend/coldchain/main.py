"""Cold-Chain Registry API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ColdChainError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized and registry bootstrapped on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema is owned by Alembic; lifespan only bootstraps the registry_state row
    - Single uvicorn worker: the write lock is per process
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coldchain.api.error_handlers import register_error_handlers
from coldchain.api.routes import handlers, health, shipments, temperature_logs
from coldchain.config import get_settings
from coldchain.core.domain_types import Principal
from coldchain.infrastructure.database import init_db
from coldchain.infrastructure.observability import setup_logging
from coldchain.services.registry_bootstrap import ensure_registry_initialized

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    async with manager.session() as db:
        await ensure_registry_initialized(db, Principal(settings.registry_owner))
    logger.info("Cold-chain registry API started")
    yield
    await manager.dispose()
    logger.info("Cold-chain registry API shutting down")


app = FastAPI(
    title="Cold-Chain Shipment Registry", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(shipments.router)
app.include_router(temperature_logs.router)
app.include_router(handlers.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the API with a single uvicorn worker."""
    uvicorn.run(
        "coldchain.main:app", host=settings.host, port=settings.port, workers=1,
    )


if __name__ == "__main__":
    run()
