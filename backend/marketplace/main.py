"""
Marketplace API

REST API exposing users, services, bookings and vendors from the
marketplace document store, with shared pagination, filtering and search.

Run with: uvicorn marketplace.main:app --port 8001 --reload
"""
import os
import time as _time_module
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware

from .dependencies import LOG_FORMAT, LOG_LEVEL, RATE_LIMIT, open_database

# Configure structured logging FIRST (before any logger calls)
from .middleware.structlog_config import configure as configure_logging
configure_logging(LOG_LEVEL, LOG_FORMAT)

import structlog
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from .middleware import RequestLoggingMiddleware, register_error_handlers
from .routers import bookings_router, services_router, users_router, vendors_router
from .services.sqlite_store import SQLiteDocumentDatabase

logger = structlog.get_logger("marketplace.api")

# API metadata
API_TITLE = "Marketplace API"
API_DESCRIPTION = """
Read API for the services marketplace.

### List endpoints

All list endpoints accept `page`, `limit` (max 100), `sort`, `order` and
`search`, and return `{meta: {page, limit, total, totalPages}, data}`.

- **Users** - search by name/email, filter by role and status
- **Services** - filter by category, status, vendor and price range
- **Bookings** - filter by customer, service, status and date range
- **Vendors** - filter by KYC status and completed jobs
"""
API_VERSION = "1.0.0"

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def _startup_checks(database: SQLiteDocumentDatabase) -> None:
    """Create the schema if needed and log what the store holds."""
    database.initialize()
    sizes = database.collection_sizes()
    if not sizes:
        logger.warning("startup_check_warning", issue="document store is empty", path=str(database.path))
    else:
        logger.info("startup_checks_passed", collections=sizes)


def _cors_origins() -> list[str]:
    origins = [o.strip() for o in os.environ.get("CORS_ORIGINS", ",".join(DEFAULT_CORS_ORIGINS)).split(",") if o.strip()]
    if "*" in origins:
        logger.warning("Wildcard CORS origin rejected for security; falling back to localhost defaults")
        return list(DEFAULT_CORS_ORIGINS)
    return origins


def create_app(
    database: SQLiteDocumentDatabase | None = None,
    rate_limit: str | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        database: Document database to serve (default: DATABASE_PATH)
        rate_limit: slowapi limit string per client (default: RATE_LIMIT env)
    """
    database = database or open_database()
    started_at = _time_module.time()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _startup_checks(app.state.database)
        yield
        logger.info("Shutting down.")

    docs_enabled = os.environ.get("ENABLE_DOCS", "true").lower() == "true"
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.database = database

    register_error_handlers(app)

    # Rate limiting
    app.state.limiter = Limiter(key_func=get_remote_address, default_limits=[rate_limit or RATE_LIMIT])
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Request logging middleware (added before CORS/GZip, so they sit outside it)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if request.headers.get("x-forwarded-proto") == "https":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.include_router(users_router, prefix="/api/v1")
    app.include_router(services_router, prefix="/api/v1")
    app.include_router(bookings_router, prefix="/api/v1")
    app.include_router(vendors_router, prefix="/api/v1")

    @app.get("/", tags=["root"])
    async def root():
        """API root - returns basic info and links."""
        return {
            "name": API_TITLE,
            "version": API_VERSION,
            "docs": "/docs",
            "endpoints": {
                "users": "/api/v1/users",
                "users_stats": "/api/v1/users/stats",
                "user": "/api/v1/users/{user_id}",
                "services": "/api/v1/services",
                "service": "/api/v1/services/{service_id}",
                "bookings": "/api/v1/bookings",
                "vendors": "/api/v1/vendors",
                "vendor": "/api/v1/vendors/{vendor_id}",
            },
        }

    @app.get("/health", tags=["root"])
    def health_check():
        """Health check with document store status and uptime."""
        uptime_seconds = round(_time_module.time() - started_at)
        try:
            sizes = app.state.database.collection_sizes()
            db_info = {"status": "connected", "collections": sizes}
            reachable = True
        except Exception as e:
            logger.error("health_check_failed", error=str(e))
            db_info = {"status": "error"}
            reachable = False

        return JSONResponse(
            status_code=200 if reachable else 503,
            content={
                "status": "healthy" if reachable else "unavailable",
                "version": API_VERSION,
                "database": db_info,
                "uptime_seconds": uptime_seconds,
            },
        )

    return app


app = create_app()


# Main entry point
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
