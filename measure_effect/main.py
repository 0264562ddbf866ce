"""
FastAPI application entry point for the Measure Effect API.

Configures logging and CORS, registers the API routers and manages the
database pool through the application lifespan.

Run locally with:

    uvicorn measure_effect.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from measure_effect import __version__
from measure_effect.core.config import Settings, get_settings
from measure_effect.core.database import init_db, close_db
from measure_effect.api.summary import router as summary_router
from measure_effect.api.client_details import router as client_details_router
from measure_effect.api.assistant import router as assistant_router
from measure_effect.api.webhook import router as webhook_router


def _load_settings_or_defaults():
    """Read log level and CORS origins; fall back when settings are incomplete."""
    try:
        settings = get_settings()
    except ValidationError:
        defaults = Settings.model_fields
        return defaults['log_level'].default, defaults['cors_origins'].default
    return settings.log_level, settings.cors_origins


log_level, cors_origins = _load_settings_or_defaults()

# Configure logging
logging.basicConfig(
    level=log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the asyncpg pool before serving and close it on shutdown."""
    logger.info("Measure Effect API starting")
    try:
        await init_db()
        logger.info("asyncpg pool ready")
    except Exception as e:
        # Requests retry the pool creation lazily and fail with 500 until it works
        logger.error(f"Could not open asyncpg pool at startup: {e}")

    yield

    logger.info("Measure Effect API shutting down")
    try:
        await close_db()
        logger.info("asyncpg pool closed")
    except Exception as e:
        logger.error(f"Could not close asyncpg pool: {e}")


app = FastAPI(
    title="Measure Effect API",
    version=__version__,
    description=(
        "Backend for the appointment-setting measure effect dashboard. "
        "Provides the monthly revision summary, client drill-down data, "
        "webhook forwarding and assistant placeholders."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(summary_router, tags=["monthly-summary"])
app.include_router(client_details_router, tags=["client-details"])
app.include_router(assistant_router, tags=["assistant"])
app.include_router(webhook_router, tags=["webhook"])


@app.get("/health")
async def health_check():
    """Liveness probe; does not touch the database."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Service name, version and documentation links."""
    return {
        "name": "Measure Effect API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "measure_effect.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
