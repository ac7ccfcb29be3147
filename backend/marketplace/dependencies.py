"""Configuration, database handle and service dependencies for the API."""
import os
from pathlib import Path

from fastapi import Depends, Request

from .config.constants import (
    BOOKINGS_COLLECTION,
    SERVICES_COLLECTION,
    USERS_COLLECTION,
    VENDORS_COLLECTION,
)
from .services.booking_service import BookingService
from .services.catalog_service import CatalogService
from .services.sqlite_store import SQLiteDocumentDatabase
from .services.user_service import UserService
from .services.vendor_service import VendorService

# Database path - configurable via env var, defaults to marketplace.db next to the package
DB_PATH = Path(os.environ.get("DATABASE_PATH", str(Path(__file__).parent.parent / "marketplace.db")))

# Query timeout in seconds (configurable via environment variable)
DB_QUERY_TIMEOUT = int(os.environ.get("DB_QUERY_TIMEOUT", "30"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# auto | json | console
LOG_FORMAT = os.environ.get("LOG_FORMAT", "auto")

# Per-client request budget enforced by slowapi
RATE_LIMIT = os.environ.get("RATE_LIMIT", "200/minute")


def open_database(path: str | Path | None = None) -> SQLiteDocumentDatabase:
    """Document database at `path` (default DATABASE_PATH)."""
    return SQLiteDocumentDatabase(path or DB_PATH, timeout=DB_QUERY_TIMEOUT)


def get_database(request: Request) -> SQLiteDocumentDatabase:
    """The database the running app was created with."""
    return request.app.state.database


def get_user_service(database: SQLiteDocumentDatabase = Depends(get_database)) -> UserService:
    return UserService(database.collection(USERS_COLLECTION))


def get_catalog_service(database: SQLiteDocumentDatabase = Depends(get_database)) -> CatalogService:
    return CatalogService(database.collection(SERVICES_COLLECTION))


def get_booking_service(database: SQLiteDocumentDatabase = Depends(get_database)) -> BookingService:
    return BookingService(database.collection(BOOKINGS_COLLECTION))


def get_vendor_service(database: SQLiteDocumentDatabase = Depends(get_database)) -> VendorService:
    return VendorService(database.collection(VENDORS_COLLECTION))
