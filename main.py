import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from boom_booking.config import Settings, get_settings
from boom_booking.database import Database
from boom_booking.exception_handlers import register_exception_handlers
from boom_booking.middleware.cors import CORSMiddleware
from boom_booking.middleware.logging import StructuredLoggingMiddleware, configure_logging
from boom_booking.middleware.subdomain import SubdomainMiddleware
from boom_booking.routes import (
    billing,
    bookings,
    business_hours,
    client_config,
    health,
    rooms,
    subdomain,
    tenants,
    usage,
)

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Create the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up the application (%s)...", settings.environment)
        db = database or Database.from_settings(settings)
        app.state.database = db
        if settings.auto_create_tables:
            await db.create_all()
        try:
            yield
        finally:
            logger.info("Shutting down the application...")
            await db.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant karaoke room booking API",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Starlette middleware is LIFO: CORS runs first, subdomain extraction last
    app.add_middleware(SubdomainMiddleware, app_domain=settings.app_domain)
    app.add_middleware(StructuredLoggingMiddleware, skip_paths=(f"{settings.api_prefix}/health",))
    app.add_middleware(CORSMiddleware)

    register_exception_handlers(app)

    prefix = settings.api_prefix
    app.include_router(tenants.router, prefix=f"{prefix}/tenants")
    app.include_router(rooms.router, prefix=f"{prefix}/rooms")
    app.include_router(business_hours.router, prefix=f"{prefix}/business-hours")
    app.include_router(bookings.router, prefix=f"{prefix}/bookings")
    app.include_router(usage.router, prefix=f"{prefix}/usage")
    app.include_router(billing.router, prefix=f"{prefix}/billing")
    app.include_router(health.router, prefix=f"{prefix}/health")
    app.include_router(subdomain.router, prefix=f"{prefix}/subdomain")
    app.include_router(client_config.router, prefix=f"{prefix}/client-config")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=get_settings().debug)
