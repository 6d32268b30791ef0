"""
FastAPI application for online appointment booking

Customers pick a service, a date and a time slot; business owners manage
services, staff availability and appointments from the dashboard.
"""
import logging
import uvicorn
from collections import defaultdict
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from contextlib import asynccontextmanager

from booking.config.settings import get_settings
from booking.config.database import create_tables
from booking.core.middleware import correlation_id_middleware, request_logging_middleware
from booking.core.monitoring import health_router
from booking.api.v1.router import api_v1_router
from booking.utils.my_logging import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


def log_routes(app: FastAPI) -> None:
    """Log all registered routes grouped by tag"""
    routes_by_tag = defaultdict(list)

    for route in app.routes:
        if isinstance(route, APIRoute):
            tag = route.tags[0] if route.tags else "other"
            for method in route.methods:
                routes_by_tag[tag].append((method, route.path, route.name))

    total = 0
    for tag, routes in sorted(routes_by_tag.items()):
        for method, path, name in sorted(routes, key=lambda r: (r[1], r[0])):
            logger.debug(f"[{tag}] {method:8} {path:50} ({name})")
            total += 1

    logger.info(f"Total routes registered: {total}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    setup_logging()
    create_tables()
    logger.info(f"{settings.APP_NAME} starting up, API at /api/v1/, health check at /health")
    log_routes(app)

    yield

    # Shutdown
    logger.info(f"{settings.APP_NAME} shutting down")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.APP_NAME,
        description="Online booking with per-employee availability and time slot generation",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "PUT"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID"],
    )

    # Registered in reverse: correlation id runs first
    app.middleware("http")(request_logging_middleware)
    app.middleware("http")(correlation_id_middleware)

    app.include_router(health_router, prefix="/health", tags=["monitoring"])
    app.include_router(api_v1_router, prefix="/api/v1", tags=["api"])

    @app.get("/")
    async def root():
        return {
            "service": settings.APP_NAME,
            "version": "0.1.0",
            "status": "running",
            "endpoints": {
                "api": "/api/v1",
                "health": "/health",
                "docs": "/docs" if settings.DEBUG else "disabled"
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "booking.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
