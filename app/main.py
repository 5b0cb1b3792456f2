from __future__ import annotations
import contextlib
import logging
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.events import router as events_router
from app.api.v1.health import router as health_router
from app.api.v1.materials import router as materials_router
from app.config import settings
from app.db.base import create_db_and_tables

logging.basicConfig(level=settings.LOG_LEVEL)
log = logging.getLogger(__name__)

description = """
Generates event marketing materials (plan, poster copy, invitation email,
Instagram captions) with a generative-language model, and stores event records.
"""
tags_metadata = [
    {"name": "materials", "description": "Marketing-material generation."},
    {"name": "events", "description": "CRUD over event records."},
    {"name": "Health", "description": "Liveness of the service and its database."},
]


@contextlib.asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    # Production schemas are managed by alembic.
    if settings.ENVIRONMENT != "prod":
        await create_db_and_tables()
    log.info("Application startup complete.")
    yield
    log.info("Application shutdown.")


app = FastAPI(
    lifespan=lifespan,
    title="Smart Event Planner API",
    description=description,
    version="0.3.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(materials_router)
app.include_router(events_router)
app.include_router(health_router)

log.info("Application configured. Environment: %s", settings.ENVIRONMENT)

