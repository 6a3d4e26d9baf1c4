"""Kebun FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kebun.api.routers import auth, plants
from kebun.api.schemas import HealthResponse
from kebun.core import setup_logging
from kebun.core.config import Settings, get_settings
from kebun.core.core import Kebun
from kebun.core.errors import KebunError
from kebun.core.remote import create_rest_client
from kebun.models import Base
from kebun.models.base import create_session_factory

logger = logging.getLogger("kebun.api")

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler — startup and shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)

    # Relational backend
    engine, SessionFactory = create_session_factory(settings.database_url)
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized")
    except Exception as e:
        logger.error(f"DB init failed: {e}")

    # REST backend (optional)
    rest_client = create_rest_client(settings) if settings.rest_enabled else None
    if rest_client is None:
        logger.info("Supabase backend not configured — /sb endpoints disabled")

    app.state.kebun = Kebun(settings, SessionFactory, rest_client)
    logger.info(f"Kebun v{VERSION} started on http://{settings.host}:{settings.port}")
    yield

    # Shutdown
    if rest_client is not None:
        rest_client.close()
    engine.dispose()
    logger.info("Kebun shutdown complete")


async def kebun_error_handler(request: Request, exc: KebunError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": exc.public_message, "data": None},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Kebun",
        description="Plant care tracking — daily watering, fertilizing and harvest records",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["accept", "authorization", "content-type", "user-agent", "x-requested-with"],
        max_age=3600,
    )
    app.add_exception_handler(KebunError, kebun_error_handler)

    # One router set, mounted per backend: /pg/... and /sb/...
    app.include_router(auth.router, prefix="/{backend}/auth", tags=["auth"])
    app.include_router(plants.router, prefix="/{backend}", tags=["plants"])

    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health(request: Request):
        kebun: Kebun = request.app.state.kebun
        return HealthResponse(
            service="kebun",
            version=VERSION,
            backends=[b.value for b in kebun.backends],
        )

    return app


app = create_app()
