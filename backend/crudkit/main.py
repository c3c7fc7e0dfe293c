"""crudkit API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CrudKitError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - OpenAPI parameters of REST actions described by rest.describer

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import crudkit.infrastructure.database as database
from crudkit import __version__
from crudkit.api.error_handlers import register_error_handlers
from crudkit.api.routes import date_dimensions, health, user_groups, users
from crudkit.config import get_settings
from crudkit.infrastructure.observability import setup_logging
from crudkit.rest.describer.openapi import install_rest_openapi

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("crudkit API started")
    yield
    logger.info("crudkit API shutting down")
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(title="crudkit API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(user_groups.router)
app.include_router(date_dimensions.router)

register_error_handlers(app)
install_rest_openapi(app)
