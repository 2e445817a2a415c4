"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from structured_mapper.config import get_settings
from structured_mapper.core.logging import setup_logging, get_logger
from structured_mapper.core.error_handlers import register_error_handlers
from structured_mapper.core.middleware import RequestContextMiddleware
from structured_mapper.api.dependencies import build_customer_dto_service
from structured_mapper.api.routes import router as api_router

settings = get_settings()


# ─── Lifespan: startup / shutdown ─────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Own the shared httpx client and the customer DTO service built on it."""
    logger = get_logger(__name__)

    setup_logging(
        level=settings.log_level,
        log_format=settings.log_format,
        mapper_level=settings.mapper_log_level,
    )
    logger.info(
        "Application starting",
        extra={
            "app": settings.app_name,
            "version": settings.app_version,
            "env": settings.app_env,
            "remote_countries": settings.uses_remote_countries,
        },
    )

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.country_api_timeout),
    ) as http_client:
        app.state.http_client = http_client
        app.state.customer_dto_service = build_customer_dto_service(http_client)
        yield

    logger.info("Application shut down gracefully.")


# ─── App factory ──────────────────────────────────────────────────────

def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    # Middleware (order matters — outermost first)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestContextMiddleware)

    register_error_handlers(application)

    application.include_router(api_router, prefix="/api/v1")

    @application.get("/health", tags=["Health"])
    async def health_check() -> dict:
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
        }

    return application


app = create_app()
